"""Conversions between ORM models and pydantic schemas."""

from models.report import ReportModel
from models.user import UserModel
from schemas.report import Report
from schemas.user import User


def user_to_model(user: User) -> UserModel:
    return UserModel(
        user_id=user.user_id,
        username=user.username,
        email=user.email,
        password_hash=user.password_hash,
        role=user.role,
        suspended_until=user.suspended_until,
        created_at=user.created_at,
    )


def model_to_user(model: UserModel) -> User:
    return User(
        user_id=model.user_id,
        username=model.username,
        email=model.email,
        password_hash=model.password_hash,
        role=model.role,
        suspended_until=model.suspended_until,
        created_at=model.created_at,
    )


def model_to_report(model: ReportModel) -> Report:
    return Report(
        report_id=model.report_id,
        reporter_id=model.reporter_id,
        reported_user_id=model.reported_user_id,
        title=model.title,
        description=model.description,
        type=model.type,
        status=model.status,
        resolved_by=model.resolved_by,
        resolved_at=model.resolved_at,
        action_taken=model.action_taken,
        created_at=model.created_at,
        updated_at=model.updated_at,
    )

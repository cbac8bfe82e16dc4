"""Report lifecycle management.

Reports start as ``pending``. Moderators and admins may move a report to any
recognized status at any time; there is no enforced ordering between
statuses. Every transition records who applied it and when. Content edits
never touch the status or the resolution metadata.
"""

import logging
from datetime import datetime
from typing import List, Optional

import pytz
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from config import INITIAL_REPORT_STATUS, REPORT_STATUSES, SUSPEND_ACTION
from core.authorization import (
    require_admin,
    require_authenticated,
    require_moderator,
    require_mutate_report,
)
from core.exceptions import (
    DuplicateReportTitleError,
    InvalidInputError,
    ReportNotFoundError,
)
from models.report import ReportModel
from schemas.auth import TokenClaims
from schemas.report import Report
from utils.converters import model_to_report
from utils.identifiers import new_id, validate_id
from utils.user_manager import UserManager

logger = logging.getLogger(__name__)


def _require_text(field: str, value: Optional[str]) -> str:
    if value is None or not value.strip():
        raise InvalidInputError(f"{field} is required and cannot be empty")
    return value.strip()


class ReportManager:
    """Manages reports and their status transitions using SQLAlchemy."""

    def __init__(self, db: Session, user_manager: UserManager):
        """Initialize ReportManager.

        Args:
            db: SQLAlchemy Session.
            user_manager: UserManager bound to the same session, used for
                suspensions triggered by moderation.
        """
        self.db = db
        self.user_manager = user_manager

    def create(
        self,
        claims: Optional[TokenClaims],
        title: str,
        description: str,
        report_type: str,
        reported_user_id: Optional[str] = None,
    ) -> Report:
        """Create a pending report owned by the caller.

        Raises:
            UnauthenticatedError: If no claims are given.
            InvalidInputError: If a field is missing or empty.
            DuplicateReportTitleError: If the title is already taken.
        """
        claims = require_authenticated(claims)
        title = _require_text("title", title)
        description = _require_text("description", description)
        report_type = _require_text("type", report_type)
        if reported_user_id is not None:
            reported_user_id = validate_id(reported_user_id, "user")

        if self._title_taken(title):
            raise DuplicateReportTitleError()

        now = datetime.now(pytz.utc).isoformat()
        model = ReportModel(
            report_id=new_id(),
            reporter_id=claims.user_id,
            reported_user_id=reported_user_id,
            title=title,
            description=description,
            type=report_type,
            status=INITIAL_REPORT_STATUS,
            created_at=now,
            updated_at=now,
        )
        try:
            self.db.add(model)
            self.db.commit()
        except IntegrityError as e:
            self.db.rollback()
            raise DuplicateReportTitleError() from e
        self.db.refresh(model)

        logger.info("Report %s created by %s", model.report_id, claims.user_id)
        return model_to_report(model)

    def get(self, report_id: str) -> Report:
        return model_to_report(self._get_model(report_id))

    def list(self, status: Optional[str] = None) -> List[Report]:
        """List reports newest first, optionally filtered by status.

        Unbounded: every matching report is returned in one response.
        """
        query = self.db.query(ReportModel)
        if status is not None:
            if status not in REPORT_STATUSES:
                raise InvalidInputError(f"Unknown report status: {status}")
            query = query.filter(ReportModel.status == status)
        models = query.order_by(ReportModel.created_at.desc()).all()
        return [model_to_report(m) for m in models]

    def list_pending(self, claims: Optional[TokenClaims]) -> List[Report]:
        require_moderator(claims)
        return self.list(INITIAL_REPORT_STATUS)

    def transition(
        self,
        claims: Optional[TokenClaims],
        report_id: str,
        action: str,
        suspend_days: Optional[int] = None,
    ) -> Report:
        """Apply a moderation action to a report.

        ``action`` is either a target status or ``suspendUser``. The latter
        resolves the report and suspends the reported user for
        ``suspend_days`` days in the same commit.

        Raises:
            UnauthenticatedError: If no claims are given.
            ForbiddenError: If the caller is not a moderator or admin.
            InvalidInputError: For an unknown action, a bad suspension length
                or a suspension on a report without a reported user.
            ReportNotFoundError: If the report does not exist.
            UserNotFoundError: If the reported user no longer exists.
        """
        require_moderator(claims)
        if action == SUSPEND_ACTION:
            new_status = "resolved"
        elif action in REPORT_STATUSES:
            new_status = action
        else:
            raise InvalidInputError(
                f"Invalid action: {action}. Must be one of: "
                f"{', '.join(REPORT_STATUSES + [SUSPEND_ACTION])}."
            )

        model = self._get_model(report_id)

        if action == SUSPEND_ACTION:
            if not model.reported_user_id:
                raise InvalidInputError("Report has no reported user to suspend")
            self.user_manager.suspend_user(
                model.reported_user_id, suspend_days, commit=False
            )

        previous = model.status
        model.status = new_status
        model.resolved_by = claims.user_id
        model.resolved_at = datetime.now(pytz.utc).isoformat()
        model.action_taken = action
        self.db.commit()
        self.db.refresh(model)

        logger.info(
            "Report %s moved %s -> %s by %s",
            model.report_id,
            previous,
            new_status,
            claims.user_id,
        )
        return model_to_report(model)

    def edit(
        self,
        claims: Optional[TokenClaims],
        report_id: str,
        title: Optional[str] = None,
        description: Optional[str] = None,
        report_type: Optional[str] = None,
    ) -> Report:
        """Update the supplied content fields of a report.

        Raises:
            UnauthenticatedError: If no claims are given.
            InvalidInputError: If nothing is supplied or a field is empty.
            ReportNotFoundError: If the report does not exist.
            ForbiddenError: If the caller neither owns the report nor holds
                a privileged role.
            DuplicateReportTitleError: If the new title belongs to another
                report.
        """
        require_authenticated(claims)
        model = self._get_model(report_id)
        require_mutate_report(claims, model_to_report(model))

        if title is None and description is None and report_type is None:
            raise InvalidInputError("Nothing to update")
        changes = {}
        if title is not None:
            changes["title"] = _require_text("title", title)
            if changes["title"] != model.title and self._title_taken(changes["title"]):
                raise DuplicateReportTitleError()
        if description is not None:
            changes["description"] = _require_text("description", description)
        if report_type is not None:
            changes["type"] = _require_text("type", report_type)

        for field, value in changes.items():
            setattr(model, field, value)
        model.updated_at = datetime.now(pytz.utc).isoformat()

        try:
            self.db.commit()
        except IntegrityError as e:
            self.db.rollback()
            raise DuplicateReportTitleError() from e
        self.db.refresh(model)

        logger.info("Report %s edited by %s", model.report_id, claims.user_id)
        return model_to_report(model)

    def remove(self, claims: Optional[TokenClaims], report_id: str) -> None:
        require_authenticated(claims)
        model = self._get_model(report_id)
        require_mutate_report(claims, model_to_report(model))
        self.db.delete(model)
        self.db.commit()
        logger.info("Report %s deleted by %s", model.report_id, claims.user_id)

    def purge_all(self, claims: Optional[TokenClaims]) -> int:
        """Delete every report. Irreversible.

        Returns:
            Number of reports deleted.
        """
        require_admin(claims)
        deleted = self.db.query(ReportModel).delete(synchronize_session=False)
        self.db.commit()
        logger.warning("All %d reports purged by %s", deleted, claims.user_id)
        return deleted

    def _title_taken(self, title: str) -> bool:
        return (
            self.db.query(ReportModel.report_id)
            .filter(ReportModel.title == title)
            .first()
            is not None
        )

    def _get_model(self, report_id: str) -> ReportModel:
        report_id = validate_id(report_id, "report")
        model = (
            self.db.query(ReportModel)
            .filter(ReportModel.report_id == report_id)
            .first()
        )
        if model is None:
            raise ReportNotFoundError(report_id)
        return model

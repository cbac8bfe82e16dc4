"""Report routes.

Reading is open to everyone; creating needs a valid token; editing and
deleting need ownership or a privileged role; purging needs an admin.
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, status

from api.routes.auth import get_current_claims
from config import API_PREFIX
from core.dependencies import ReportManagerDep
from core.exceptions import InvalidInputError
from schemas.auth import TokenClaims
from schemas.report import (
    CreateReportRequest,
    CreateReportResponse,
    DeleteAllResponse,
    Report,
    UpdateReportRequest,
)
from schemas.user import MessageResponse
from utils.identifiers import validate_id

router = APIRouter(prefix=f"{API_PREFIX}/reports", tags=["Report"])


@router.post(
    "",
    response_model=CreateReportResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a report",
)
def create_report(
    req: CreateReportRequest,
    report_manager: ReportManagerDep,
    claims: TokenClaims = Depends(get_current_claims),
) -> CreateReportResponse:
    report = report_manager.create(
        claims,
        title=req.title,
        description=req.description,
        report_type=req.type,
        reported_user_id=req.reported_user_id,
    )
    return CreateReportResponse(report_id=report.report_id)


@router.get("", response_model=List[Report], summary="List reports")
def list_reports(
    report_manager: ReportManagerDep,
    status: Optional[str] = None,
) -> List[Report]:
    """List all reports, newest first.

    Args:
        report_manager: Injected ReportManager instance.
        status: Optional status filter.
    """
    return report_manager.list(status)


@router.get("/{report_id}", response_model=Report, summary="Get a report")
def get_report(report_id: str, report_manager: ReportManagerDep) -> Report:
    return report_manager.get(report_id)


@router.put("/{report_id}", response_model=Report, summary="Edit a report")
def edit_report(
    report_id: str,
    req: UpdateReportRequest,
    report_manager: ReportManagerDep,
    claims: TokenClaims = Depends(get_current_claims),
) -> Report:
    """Edit the title, description or type of a report.

    A body ``id`` that differs from the path id is rejected.
    """
    if req.report_id is not None and validate_id(req.report_id, "report") != validate_id(
        report_id, "report"
    ):
        raise InvalidInputError("Body id does not match the URL id")
    return report_manager.edit(
        claims,
        report_id,
        title=req.title,
        description=req.description,
        report_type=req.type,
    )


@router.delete("/{report_id}", response_model=MessageResponse, summary="Delete a report")
def delete_report(
    report_id: str,
    report_manager: ReportManagerDep,
    claims: TokenClaims = Depends(get_current_claims),
) -> MessageResponse:
    report_manager.remove(claims, report_id)
    return MessageResponse(message="Report deleted")


@router.delete("", response_model=DeleteAllResponse, summary="Delete all reports")
def delete_all_reports(
    report_manager: ReportManagerDep,
    claims: TokenClaims = Depends(get_current_claims),
) -> DeleteAllResponse:
    deleted = report_manager.purge_all(claims)
    return DeleteAllResponse(message=f"Deleted {deleted} reports", deleted_count=deleted)

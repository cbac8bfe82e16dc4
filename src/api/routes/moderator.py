"""Moderation routes (moderator or admin role)."""

from typing import List

from fastapi import APIRouter, Depends

from api.routes.auth import get_current_claims
from config import API_PREFIX
from core.dependencies import ReportManagerDep
from schemas.auth import TokenClaims
from schemas.report import ModerationActionRequest, Report

router = APIRouter(prefix=f"{API_PREFIX}/mod", tags=["Moderation"])


@router.get("/reports", response_model=List[Report], summary="List pending reports")
def list_pending_reports(
    report_manager: ReportManagerDep,
    claims: TokenClaims = Depends(get_current_claims),
) -> List[Report]:
    return report_manager.list_pending(claims)


@router.patch("/reports/{report_id}", response_model=Report, summary="Moderate a report")
def moderate_report(
    report_id: str,
    req: ModerationActionRequest,
    report_manager: ReportManagerDep,
    claims: TokenClaims = Depends(get_current_claims),
) -> Report:
    """Move a report to a new status, or resolve it and suspend the reported user.

    Args:
        report_id: Report to act on.
        req: ``action`` is a status name or ``suspendUser``; ``suspendDays``
            is required for the latter.
        report_manager: Injected ReportManager instance.
        claims: Verified caller claims.

    Returns:
        The updated report.
    """
    return report_manager.transition(
        claims, report_id, req.action, suspend_days=req.suspend_days
    )

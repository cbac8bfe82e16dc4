"""Report schema definitions."""

from typing import Optional

from pydantic import Field, StrictInt

from schemas.base import CamelModel


class Report(CamelModel):
    """A bug or feature report and its moderation state."""

    report_id: str = Field(alias="id")
    reporter_id: str = Field(description="Owner of the report, immutable.")
    reported_user_id: Optional[str] = Field(
        default=None, description="User the report is about, if any."
    )
    title: str
    description: str
    type: str = Field(description="Open enum, e.g. 'bug' or 'feature'.")
    status: str = "pending"
    resolved_by: Optional[str] = None
    resolved_at: Optional[str] = None
    action_taken: Optional[str] = None
    created_at: str
    updated_at: str


class CreateReportRequest(CamelModel):
    title: str = Field(min_length=1)
    description: str = Field(min_length=1)
    type: str = Field(min_length=1)
    reported_user_id: Optional[str] = None


class CreateReportResponse(CamelModel):
    message: str = "Report created"
    report_id: str = Field(alias="id")


class UpdateReportRequest(CamelModel):
    report_id: Optional[str] = Field(default=None, alias="id")
    title: Optional[str] = None
    description: Optional[str] = None
    type: Optional[str] = None


class ModerationActionRequest(CamelModel):
    action: str = Field(
        description="A report status, or 'suspendUser' to resolve and suspend."
    )
    suspend_days: Optional[StrictInt] = None


class DeleteAllResponse(CamelModel):
    message: str
    deleted_count: int

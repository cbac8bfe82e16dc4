"""Report database model."""

from sqlalchemy import Column, Index, String, Text
from .base import Base


class ReportModel(Base):
    """Report database model."""

    __tablename__ = "reports"
    __table_args__ = (
        Index("idx_status_created_at", "status", "created_at"),
    )

    report_id = Column(String, primary_key=True, index=True)
    reporter_id = Column(String, index=True, nullable=False)
    reported_user_id = Column(String, nullable=True)
    title = Column(String, unique=True, nullable=False)
    description = Column(Text, nullable=False)
    type = Column(String, nullable=False)
    status = Column(String, nullable=False, default="pending")
    resolved_by = Column(String, nullable=True)
    resolved_at = Column(String, nullable=True)
    action_taken = Column(String, nullable=True)
    created_at = Column(String, nullable=False)
    updated_at = Column(String, nullable=False)

from sqlalchemy import JSON, Column, String
from .base import Base


class TrelloStatsModel(Base):
    """Singleton board snapshot, keyed by ``stats_id`` ("dailyStats")."""

    __tablename__ = "trello_stats"

    stats_id = Column(String, primary_key=True)
    data = Column(JSON, nullable=False, default=list)
    updated_at = Column(String, nullable=False)

"""Schemas for the Trello snapshot and visitor analytics endpoints."""

from typing import List, Optional

from schemas.base import CamelModel


class ListStats(CamelModel):
    list: str
    cards: int


class TrelloStatsResponse(CamelModel):
    stats: List[ListStats]
    updated_at: Optional[str] = None


class TrelloRefreshResponse(CamelModel):
    success: bool = True
    stats: List[ListStats]


class VisitorCountry(CamelModel):
    country: str
    count: int


class LogVisitResponse(CamelModel):
    message: str
    country: str

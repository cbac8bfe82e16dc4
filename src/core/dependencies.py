"""Dependency injection module for FastAPI.

This module provides dependency injection functions for FastAPI routes.
Every manager receives its request-scoped DB session at construction; no
handler reaches for a global store handle.
"""

from typing import Annotated, AsyncIterator

import httpx
from fastapi import Depends
from sqlalchemy.orm import Session

from config import HTTP_TIMEOUT_SECONDS
from core.database import get_db
from utils import report_manager
from utils import trello_scraper
from utils import user_manager
from utils import visitor_manager


def get_user_manager(db: Session = Depends(get_db)) -> user_manager.UserManager:
    """Get UserManager instance with request-scoped DB session.

    Args:
        db: Database session.

    Returns:
        UserManager instance.
    """
    return user_manager.UserManager(db)


def get_report_manager(
    db: Session = Depends(get_db),
    users: user_manager.UserManager = Depends(get_user_manager),
) -> report_manager.ReportManager:
    """Get ReportManager instance sharing the request's DB session.

    Args:
        db: Database session.
        users: UserManager bound to the same session.

    Returns:
        ReportManager instance.
    """
    return report_manager.ReportManager(db, users)


def get_trello_stats_manager(
    db: Session = Depends(get_db),
) -> trello_scraper.TrelloStatsManager:
    """Get TrelloStatsManager instance with request-scoped DB session."""
    return trello_scraper.TrelloStatsManager(db)


def get_visitor_manager(
    db: Session = Depends(get_db),
) -> visitor_manager.VisitorManager:
    """Get VisitorManager instance with request-scoped DB session."""
    return visitor_manager.VisitorManager(db)


async def get_http_client() -> AsyncIterator[httpx.AsyncClient]:
    """Outbound HTTP client for collaborator services, closed after the request."""
    async with httpx.AsyncClient(timeout=HTTP_TIMEOUT_SECONDS) as client:
        yield client


# Type aliases for dependency injection
UserManagerDep = Annotated[
    user_manager.UserManager, Depends(get_user_manager)
]
ReportManagerDep = Annotated[
    report_manager.ReportManager, Depends(get_report_manager)
]
TrelloStatsManagerDep = Annotated[
    trello_scraper.TrelloStatsManager, Depends(get_trello_stats_manager)
]
VisitorManagerDep = Annotated[
    visitor_manager.VisitorManager, Depends(get_visitor_manager)
]
HttpClientDep = Annotated[httpx.AsyncClient, Depends(get_http_client)]

"""Trello board snapshot.

The public board JSON is fetched once, reduced to a card count per open list
and stored as a single ``dailyStats`` row. A background task repeats this
daily; the snapshot table is never touched by report or user operations.
"""

import asyncio
import logging
from datetime import datetime, timedelta
from typing import Any, Dict, List, Optional

import httpx
import pytz
from fastapi.concurrency import run_in_threadpool
from sqlalchemy.orm import Session

from config import HTTP_TIMEOUT_SECONDS, TRELLO_BOARD_URL, TRELLO_REFRESH_HOUR
from core.exceptions import ExternalServiceError
from models.trello_stats import TrelloStatsModel

logger = logging.getLogger(__name__)

SNAPSHOT_ID = "dailyStats"


def summarize_board(board: Dict[str, Any]) -> List[Dict[str, Any]]:
    """Count cards per open list, keeping the board's list order.

    Cards on closed lists are never counted since closed lists are dropped.
    """
    lists = board.get("lists") or []
    cards = board.get("cards") or []
    return [
        {
            "list": board_list.get("name", ""),
            "cards": sum(1 for card in cards if card.get("idList") == board_list.get("id")),
        }
        for board_list in lists
        if board_list.get("closed") is False
    ]


async def fetch_board_stats(
    client: Optional[httpx.AsyncClient] = None,
    url: str = TRELLO_BOARD_URL,
) -> List[Dict[str, Any]]:
    """Download the board JSON and summarize it.

    Raises:
        ExternalServiceError: If the board cannot be fetched or parsed.
    """
    owns_client = client is None
    if owns_client:
        client = httpx.AsyncClient(timeout=HTTP_TIMEOUT_SECONDS)
    try:
        response = await client.get(url)
        response.raise_for_status()
        board = response.json()
    except (httpx.HTTPError, ValueError) as e:
        logger.error("Failed to fetch Trello board %s: %s", url, e)
        raise ExternalServiceError("Trello board could not be fetched") from e
    finally:
        if owns_client:
            await client.aclose()

    if not isinstance(board, dict):
        raise ExternalServiceError("Trello board has an unexpected format")
    return summarize_board(board)


class TrelloStatsManager:
    """Reads and upserts the board snapshot."""

    def __init__(self, db: Session):
        self.db = db

    def get_snapshot(self) -> Optional[TrelloStatsModel]:
        return (
            self.db.query(TrelloStatsModel)
            .filter(TrelloStatsModel.stats_id == SNAPSHOT_ID)
            .first()
        )

    def save_snapshot(self, stats: List[Dict[str, Any]]) -> TrelloStatsModel:
        model = self.get_snapshot()
        now = datetime.now(pytz.utc).isoformat()
        if model is None:
            model = TrelloStatsModel(stats_id=SNAPSHOT_ID, data=stats, updated_at=now)
            self.db.add(model)
        else:
            model.data = stats
            model.updated_at = now
        self.db.commit()
        self.db.refresh(model)
        return model

    async def refresh(
        self, client: Optional[httpx.AsyncClient] = None
    ) -> List[Dict[str, Any]]:
        stats = await fetch_board_stats(client)
        await run_in_threadpool(self.save_snapshot, stats)
        logger.info("Trello stats updated (%d lists)", len(stats))
        return stats


def seconds_until_next_run(now: datetime, hour: int = TRELLO_REFRESH_HOUR) -> float:
    """Seconds from ``now`` until the next occurrence of ``hour``:00 UTC."""
    now = now.astimezone(pytz.utc)
    next_run = now.replace(hour=hour, minute=0, second=0, microsecond=0)
    if next_run <= now:
        next_run += timedelta(days=1)
    return (next_run - now).total_seconds()


async def run_daily_refresh(session_factory, hour: int = TRELLO_REFRESH_HOUR) -> None:
    """Refresh the snapshot every day at ``hour`` UTC until cancelled.

    Args:
        session_factory: Callable returning a new SQLAlchemy Session.
        hour: Hour of day (UTC) to run at.
    """
    while True:
        delay = seconds_until_next_run(datetime.now(pytz.utc), hour)
        logger.info("Next Trello refresh in %.0f seconds", delay)
        await asyncio.sleep(delay)

        db = session_factory()
        try:
            await TrelloStatsManager(db).refresh()
        except Exception:
            # Keep the loop alive; the next attempt is tomorrow
            logger.exception("Scheduled Trello refresh failed")
        finally:
            db.close()

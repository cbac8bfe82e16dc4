"""Trello snapshot and visitor analytics routes."""

import logging
from typing import List

from fastapi import APIRouter, Request
from fastapi.concurrency import run_in_threadpool

from config import API_PREFIX
from core.dependencies import HttpClientDep, TrelloStatsManagerDep, VisitorManagerDep
from core.exceptions import NotFoundError
from schemas.collaborators import (
    LogVisitResponse,
    TrelloRefreshResponse,
    TrelloStatsResponse,
    VisitorCountry,
)
from utils.visitor_manager import client_ip, lookup_country

logger = logging.getLogger(__name__)

router = APIRouter(prefix=API_PREFIX, tags=["Stats"])


@router.get("/trello-stats", response_model=TrelloStatsResponse, summary="Latest board snapshot")
def get_trello_stats(stats_manager: TrelloStatsManagerDep) -> TrelloStatsResponse:
    snapshot = stats_manager.get_snapshot()
    if snapshot is None:
        raise NotFoundError("No stats available")
    return TrelloStatsResponse(stats=snapshot.data, updated_at=snapshot.updated_at)


@router.post(
    "/trello-stats/update",
    response_model=TrelloRefreshResponse,
    summary="Scrape the board now",
)
async def update_trello_stats(
    stats_manager: TrelloStatsManagerDep,
    client: HttpClientDep,
) -> TrelloRefreshResponse:
    stats = await stats_manager.refresh(client)
    return TrelloRefreshResponse(stats=stats)


@router.post("/log-visit", response_model=LogVisitResponse, summary="Count a visit")
async def log_visit(
    request: Request,
    visitor_manager: VisitorManagerDep,
    client: HttpClientDep,
) -> LogVisitResponse:
    country = await lookup_country(client, client_ip(request))
    await run_in_threadpool(visitor_manager.record_visit, country)
    return LogVisitResponse(message=f"Visit recorded: {country}", country=country)


@router.get(
    "/visitor-countries",
    response_model=List[VisitorCountry],
    summary="Visit counts per country",
)
def list_visitor_countries(visitor_manager: VisitorManagerDep) -> List[VisitorCountry]:
    return visitor_manager.list_countries()

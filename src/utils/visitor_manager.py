"""Visitor country counters.

A visit is attributed to the country of the client IP as reported by the
geo-IP service; lookups that fail in any way count towards "Unknown".
"""

import logging
from typing import List, Optional

import httpx
from fastapi import Request
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from config import GEOIP_URL_TEMPLATE, UNKNOWN_COUNTRY
from models.visitor_country import VisitorCountryModel
from schemas.collaborators import VisitorCountry

logger = logging.getLogger(__name__)

FALLBACK_IP = "127.0.0.1"


def client_ip(request: Request) -> str:
    """First X-Forwarded-For hop, else the socket peer, else loopback."""
    forwarded = request.headers.get("x-forwarded-for", "")
    first_hop = forwarded.split(",")[0].strip()
    if first_hop:
        return first_hop
    if request.client and request.client.host:
        return request.client.host
    return FALLBACK_IP


async def lookup_country(client: httpx.AsyncClient, ip: str) -> str:
    try:
        response = await client.get(GEOIP_URL_TEMPLATE.format(ip=ip))
        response.raise_for_status()
        data = response.json()
    except (httpx.HTTPError, ValueError) as e:
        logger.warning("Geo-IP lookup failed for %s: %s", ip, e)
        return UNKNOWN_COUNTRY
    if not isinstance(data, dict):
        return UNKNOWN_COUNTRY
    return data.get("country_name") or UNKNOWN_COUNTRY


class VisitorManager:
    """Keeps one running counter per country."""

    def __init__(self, db: Session):
        self.db = db

    def record_visit(self, country: str) -> int:
        """Increment the counter for ``country``, creating it if needed.

        Returns:
            The counter value after the increment.
        """
        model = self._get_model(country)
        if model is None:
            try:
                model = VisitorCountryModel(country=country, count=1)
                self.db.add(model)
                self.db.commit()
                return model.count
            except IntegrityError:
                # Another request created the row first
                self.db.rollback()
                model = self._get_model(country)

        model.count = VisitorCountryModel.count + 1
        self.db.commit()
        self.db.refresh(model)
        return model.count

    def list_countries(self) -> List[VisitorCountry]:
        models = (
            self.db.query(VisitorCountryModel)
            .order_by(VisitorCountryModel.count.desc(), VisitorCountryModel.country)
            .all()
        )
        return [VisitorCountry(country=m.country, count=m.count) for m in models]

    def _get_model(self, country: str) -> Optional[VisitorCountryModel]:
        return (
            self.db.query(VisitorCountryModel)
            .filter(VisitorCountryModel.country == country)
            .first()
        )

"""Utility helpers."""

from __future__ import annotations

import logging
from datetime import date, datetime


def configure_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(level=level, format="%(levelname)s:%(name)s:%(message)s")


def today() -> date:
    return date.today()


def parse_date(s: str) -> date:
    """Calendar date of an ISO date or datetime string, time and zone dropped."""

    return datetime.fromisoformat(s.replace("Z", "")[:19]).date()


def parse_month(s: str) -> date:
    """Parse ``YYYY-MM`` into the first day of that month."""

    return datetime.strptime(s, "%Y-%m").date()

"""Month grid and upcoming-event selection for the school calendar."""

from __future__ import annotations

from datetime import date, datetime, timedelta
from typing import Dict, Iterable, List, Optional

from . import util
from .models import CalendarDay, CalendarEvent

GRID_DAYS = 42
WEEKDAY_HEADERS = ("Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat")
UPCOMING_LIMIT = 5


def _event_date(event: CalendarEvent) -> date:
    return util.parse_date(event.date)


def grid_start(reference: date) -> date:
    """First cell of the grid: the Sunday on or before the 1st of the month."""

    first = reference.replace(day=1)
    # date.weekday() is Monday=0; the grid starts on Sunday.
    return first - timedelta(days=(first.weekday() + 1) % 7)


def build_month_grid(
    reference: date,
    events: Iterable[CalendarEvent],
    *,
    today: Optional[date] = None,
) -> List[CalendarDay]:
    """Build the 42 day cells shown for ``reference``'s month.

    Events are bucketed by calendar date only; no time zone conversion is
    applied to event dates.
    """

    if today is None:
        today = util.today()

    by_date: Dict[date, List[CalendarEvent]] = {}
    for event in events:
        by_date.setdefault(_event_date(event), []).append(event)

    start = grid_start(reference)
    days: List[CalendarDay] = []
    for i in range(GRID_DAYS):
        cur = start + timedelta(days=i)
        days.append(
            CalendarDay(
                date=cur,
                events=list(by_date.get(cur, [])),
                isCurrentMonth=(cur.year, cur.month) == (reference.year, reference.month),
                isToday=cur == today,
            )
        )
    return days


def grid_weeks(days: List[CalendarDay]) -> List[List[CalendarDay]]:
    return [days[i : i + 7] for i in range(0, len(days), 7)]


def shift_month(reference: date, step: int) -> date:
    """First day of the month ``step`` months away from ``reference``."""

    index = reference.year * 12 + (reference.month - 1) + step
    return date(index // 12, index % 12 + 1, 1)


def month_label(reference: date) -> str:
    return reference.strftime("%B %Y")


def events_in_date_order(events: Iterable[CalendarEvent]) -> List[CalendarEvent]:
    return sorted(events, key=_event_date)


def upcoming(
    events: Iterable[CalendarEvent],
    now: date,
    limit: int = UPCOMING_LIMIT,
) -> List[CalendarEvent]:
    """Events on or after ``now``'s date, soonest first, at most ``limit``."""

    cutoff = now.date() if isinstance(now, datetime) else now
    selected = [e for e in events if _event_date(e) >= cutoff]
    selected.sort(key=_event_date)
    return selected[:limit]

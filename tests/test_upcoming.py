from datetime import date, datetime

from pacifico_portal import calendar_grid, fallback, models


def make_event(event_id, day):
    return models.CalendarEvent(id=event_id, title=event_id, date=day, startTime="All Day")


def test_upcoming_excludes_past_and_orders_by_date():
    events = fallback.sample_events()
    result = calendar_grid.upcoming(events, date(2024, 12, 21), limit=5)
    dates = [e.date for e in result]
    assert "2024-12-20" not in dates
    assert dates[0] == "2024-12-22"
    assert dates == sorted(dates)
    assert len(result) == 5


def test_upcoming_includes_events_today():
    events = [make_event("today", "2024-12-21"), make_event("past", "2024-12-20")]
    result = calendar_grid.upcoming(events, datetime(2024, 12, 21, 18, 30))
    assert [e.id for e in result] == ["today"]


def test_upcoming_truncates_and_keeps_input_order_for_ties():
    events = [
        make_event("c", "2025-02-01"),
        make_event("a1", "2025-01-01"),
        make_event("a2", "2025-01-01"),
        make_event("b", "2025-01-10"),
    ]
    result = calendar_grid.upcoming(events, date(2024, 12, 1), limit=3)
    assert [e.id for e in result] == ["a1", "a2", "b"]


def test_upcoming_empty_when_nothing_ahead():
    events = [make_event("old", "2020-01-01")]
    assert calendar_grid.upcoming(events, date(2024, 1, 1)) == []


def test_events_in_date_order_keeps_all_events():
    events = [make_event("b", "2025-01-02"), make_event("a", "2024-01-02")]
    assert [e.id for e in calendar_grid.events_in_date_order(events)] == ["a", "b"]

"""Command line interface for the parent portal."""

from __future__ import annotations

import argparse
from typing import List

from . import calendar_grid, config, sections, util
from .api import ContentAPIClient
from .portal import CalendarView, DownloadsView, GalleryView
from .sections import FallbackPolicy


def parse_args(argv: List[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Pacifico parent portal")
    parser.add_argument("--dump-json", action="store_true")
    parser.add_argument(
        "--offline", action="store_true", help="Use saved JSON snapshots"
    )
    parser.add_argument(
        "--fallback",
        choices=[p.value for p in FallbackPolicy],
        help="What to show when the content API fails",
    )
    parser.add_argument("--verbose", action="store_true")
    sub = parser.add_subparsers(dest="command", required=True)

    serve = sub.add_parser("serve", help="Run the web server")
    serve.add_argument("--host")
    serve.add_argument("--port", type=int)

    cal = sub.add_parser("calendar", help="Print a month of school events")
    cal.add_argument("--month", help="YYYY-MM, defaults to the current month")
    cal.add_argument("--upcoming", type=int, default=calendar_grid.UPCOMING_LIMIT)
    cal.add_argument("--list", action="store_true", help="List events instead of the grid")

    dl = sub.add_parser("downloads", help="List downloadable files")
    dl.add_argument("--search", default="")
    dl.add_argument("--category", default="all")
    dl.add_argument("--type", default="all")

    gal = sub.add_parser("gallery", help="List photo albums")
    gal.add_argument("--album", help="Show the photos of one album")
    return parser.parse_args(argv)


def _client(args: argparse.Namespace, settings: config.Settings) -> ContentAPIClient:
    token = ""
    if not args.offline:
        from . import auth

        token = auth.acquire_token(settings)
    return ContentAPIClient(
        settings.API_URL,
        token,
        timeout=settings.REQUEST_TIMEOUT,
        dump_json=args.dump_json,
        offline=args.offline,
    )


def _print_state(state: sections.SectionState) -> None:
    if state.degraded:
        print(f"[{state.source} data] {state.error or 'content API unavailable'}")


def _cell(day) -> str:
    label = f"{day.date.day:>2}"
    if day.isToday:
        return f"[{label}]"
    if not day.isCurrentMonth:
        return f"({label})"
    return f" {label}" + ("*" if day.events else " ")


def show_calendar(args: argparse.Namespace, view: CalendarView) -> None:
    month = util.parse_month(args.month) if args.month else util.today()
    view.show(month)
    _print_state(view.events.state)
    events = view.events.state.data
    print(calendar_grid.month_label(view.current))
    if args.list:
        for e in calendar_grid.events_in_date_order(events):
            end = f" - {e.endTime}" if e.endTime else ""
            print(f"{e.date} {e.startTime}{end} [{e.type}] {e.title}")
    else:
        print(" ".join(f"{d:>4}" for d in calendar_grid.WEEKDAY_HEADERS))
        grid = calendar_grid.build_month_grid(view.current, events)
        for week in calendar_grid.grid_weeks(grid):
            print(" ".join(_cell(day) for day in week))
    print("Upcoming events:")
    soon = calendar_grid.upcoming(events, util.today(), args.upcoming)
    if not soon:
        print("  No upcoming events")
    for e in soon:
        print(f"  {e.date} {e.startTime} {e.title}")


def show_downloads(args: argparse.Namespace, view: DownloadsView) -> None:
    view.load()
    _print_state(view.files.state)
    view.set_filters(args.search, args.category, args.type)
    files = view.filtered
    print(f"{len(files)} Files")
    for f in files:
        print(f"{f.uploadDate} {f.type:<8} {f.size:>8}  {f.name} ({f.category})")


def show_gallery(args: argparse.Namespace, view: GalleryView) -> None:
    view.load()
    _print_state(view.albums.state)
    if args.album:
        album = view.open_album(args.album)
        if album is None:
            print(f"No album {args.album}")
            return
        print(f"{album.title} ({album.date})")
        for p in album.photos:
            print(f"  {p.title}: {p.url}")
        return
    print(f"{len(view.albums.state.data)} Albums")
    for a in view.albums.state.data:
        print(f"{a.id:>4} {a.title} - {a.date} - {a.photoCount} photos")


def main(argv: List[str] | None = None) -> None:
    args = parse_args(argv)
    util.configure_logging(args.verbose)
    settings = config.get_settings()
    policy = FallbackPolicy(args.fallback or settings.FALLBACK_POLICY)

    if args.command == "serve":
        import uvicorn

        from .server import build_client, create_app

        client = build_client(settings, dump_json=args.dump_json, offline=args.offline)
        uvicorn.run(
            create_app(settings, client),
            host=args.host or settings.HOST,
            port=args.port or settings.PORT,
            log_level="debug" if args.verbose else "info",
        )
        return

    client = _client(args, settings)
    if args.command == "calendar":
        show_calendar(args, CalendarView(client, policy))
    elif args.command == "downloads":
        show_downloads(args, DownloadsView(client, policy))
    elif args.command == "gallery":
        show_gallery(args, GalleryView(client, policy))


if __name__ == "__main__":  # pragma: no cover
    main()

#!/usr/bin/env python3
"""Schedule widget command line.

Reads the timetable cached by the Wing CQUT app and prints what the
home-screen widgets show, toggles widget state, or exports the cached
week as an iCalendar (.ics) file.
"""

import argparse
import json
import logging
import os
import sys
from dataclasses import asdict
from datetime import date, datetime
from typing import Optional

from schedule_cache import JsonFileStore, ScheduleCacheReader
from transformer import ICalTransformer
from widget import DayOffsetState, WidgetEnvironment, get_renderer
from widget.renderers import RENDERERS

DEFAULT_PREFS_PATH = os.environ.get("WING_PREFS_PATH", "shared_preferences.json")
DEFAULT_WIDGET_PREFS_PATH = os.environ.get("WING_WIDGET_PREFS_PATH", "today_course_widget_prefs.json")


def parse_date(date_str: str) -> date:
    """Parse date string in YYYY-MM-DD format."""
    try:
        return datetime.strptime(date_str, "%Y-%m-%d").date()
    except ValueError:
        raise argparse.ArgumentTypeError(
            f"Invalid date format: '{date_str}'. Expected YYYY-MM-DD."
        )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Show and export the schedule cached for the home-screen widgets.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python3 wing_widget.py courses --offset 1
  python3 wing_widget.py --prefs ~/.local/share/cqut/shared_preferences.json render today-course --widget-id 7
  python3 wing_widget.py export --output week.ics
        """
    )

    parser.add_argument(
        "--prefs",
        default=DEFAULT_PREFS_PATH,
        help=f"Preferences file written by the app (default: {DEFAULT_PREFS_PATH})"
    )

    parser.add_argument(
        "--widget-prefs",
        default=DEFAULT_WIDGET_PREFS_PATH,
        help=f"Widget state file (default: {DEFAULT_WIDGET_PREFS_PATH})"
    )

    parser.add_argument(
        "--date",
        type=parse_date,
        default=None,
        help="Use this date as today (format: YYYY-MM-DD). Default: system date"
    )

    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Log debug messages to stderr"
    )

    commands = parser.add_subparsers(dest="command", required=True)

    header = commands.add_parser("header", help="Print the widget header")
    header.add_argument("--offset", type=int, default=None, help="Day offset from today")

    courses = commands.add_parser("courses", help="Print the course list")
    courses.add_argument("--offset", type=int, default=0, help="Day offset from today (default: 0)")

    commands.add_parser("week", help="Print the week count of the cached week")

    render = commands.add_parser("render", help="Print a widget's view as JSON")
    render.add_argument("kind", choices=sorted(RENDERERS), help="Widget kind")
    render.add_argument("--widget-id", type=int, default=0, help="Widget instance id (default: 0)")
    render.add_argument("--dark", action="store_true", help="Assume the system theme is dark")

    toggle = commands.add_parser("toggle", help="Switch a widget between today and tomorrow")
    toggle.add_argument("widget_id", type=int, help="Widget instance id")

    export = commands.add_parser("export", help="Export the cached week to iCalendar")
    export.add_argument(
        "-o", "--output",
        default="schedule.ics",
        help="Output file path (default: schedule.ics)"
    )

    return parser


def run(args: argparse.Namespace) -> None:
    prefs = JsonFileStore(args.prefs)
    reader = ScheduleCacheReader(prefs)
    today: Optional[date] = args.date

    if args.command == "header":
        if args.offset is None:
            header = reader.load_header(today)
        else:
            header = reader.load_header_by_day_offset(today, args.offset)
        print(f"{header.schedule_name}  {header.date_text}  {header.week_text}")

    elif args.command == "courses":
        items = reader.load_courses_by_day_offset(today, args.offset)
        if not items:
            print("No courses.")
        for item in items:
            print(f"{item.time or '-'}  {item.name}  {item.location.strip()}  {item.teacher.strip()}".rstrip())

    elif args.command == "week":
        week_count = reader.load_week_count_text(today)
        print(week_count or "Cached week is not the current week.")

    elif args.command == "render":
        env = WidgetEnvironment(
            reader=reader,
            prefs=prefs,
            offsets=DayOffsetState(JsonFileStore(args.widget_prefs)),
            system_dark=args.dark,
        )
        view = get_renderer(args.kind).render(env, args.widget_id, today)
        print(json.dumps(asdict(view), ensure_ascii=False, indent=2))

    elif args.command == "toggle":
        offset = DayOffsetState(JsonFileStore(args.widget_prefs)).toggle(args.widget_id)
        print(f"Widget {args.widget_id} now shows {'tomorrow' if offset else 'today'}.")

    elif args.command == "export":
        document = reader.load_latest_document()
        if document is None:
            raise ValueError("No cached schedule found. Open the app to sync the schedule first.")

        calendar, output_path = ICalTransformer().export(document, args.output, today)

        print(f"Exported {len(calendar.subcomponents)} events to: {output_path}")


def main(argv: Optional[list[str]] = None) -> None:
    """Main entry point for the widget command line."""
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s: %(name)s: %(message)s",
    )

    try:
        run(args)
    except KeyboardInterrupt:
        print("\nOperation cancelled by user.", file=sys.stderr)
        sys.exit(130)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)
    except Exception as e:
        print(f"Error: An unexpected error occurred: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()

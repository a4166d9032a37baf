#!/usr/bin/env python3
"""Class schedule checker.

Resolves the end date and session calendar of a weekly class, checks the
room for conflicting classes and optionally stores the class and exports
its sessions to an iCalendar (.ics) file.
"""

import argparse
import sys
from datetime import date, datetime, time
from typing import Optional

from holiday_calendar import HolidayCalendar
from repository import ExistingSlotRepository, InMemorySlotRepository, SqliteSlotRepository
from scheduling import (
    ClassScheduleRequest,
    DuplicateClassError,
    InvalidInputError,
    PersistenceError,
    Rejected,
    ScheduleConflictError,
    ScheduleError,
    ScheduleValidator,
    TimeRange,
    UnresolvableScheduleError,
    Weekday,
    parse_weekdays,
)
from transformer import ICalTransformer


def parse_date(date_str: str) -> date:
    """Parse date string in YYYY-MM-DD format."""
    try:
        return datetime.strptime(date_str, "%Y-%m-%d").date()
    except ValueError:
        raise argparse.ArgumentTypeError(
            f"Invalid date format: '{date_str}'. Expected YYYY-MM-DD."
        )


def parse_time(time_str: str) -> time:
    """Parse time string in HH:MM format."""
    try:
        return datetime.strptime(time_str.strip(), "%H:%M").time()
    except ValueError:
        raise argparse.ArgumentTypeError(
            f"Invalid time format: '{time_str}'. Expected HH:MM."
        )


def parse_days(days_str: str) -> frozenset[Weekday]:
    """Parse a comma-separated weekday list such as "Mon,Wed"."""
    try:
        return parse_weekdays(days_str)
    except InvalidInputError as e:
        raise argparse.ArgumentTypeError(
            f"Invalid weekday: '{e.value}'. Expected e.g. Mon,Wed or 'Thứ 2,Thứ 4'."
        )


def describe_error(error: ScheduleError) -> str:
    """Format a schedule error as one line for the terminal."""
    if isinstance(error, ScheduleConflictError):
        conflict = error.conflict
        return (
            f"Room {conflict.room_id} conflicts on {conflict.weekday.label} "
            f"{conflict.conflicting_time_range} with class {conflict.conflicting_class_id}"
        )
    if isinstance(error, UnresolvableScheduleError):
        return (
            f"Cannot compute a schedule: only {error.sessions_found} of "
            f"{error.total_sessions} sessions fit before {error.horizon_end}"
        )
    if isinstance(error, InvalidInputError):
        return f"Invalid {error.field}: {error.reason}"
    if isinstance(error, DuplicateClassError):
        return (
            f"Class {error.class_id} already exists; "
            f"pass --exclude-class {error.class_id} to update it"
        )
    return str(error)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Resolve a weekly class schedule and check it for room conflicts.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python3 class_schedule.py --start-date 2024-01-01 --sessions 24 --days Mon,Wed --start-time 08:00 --end-time 09:30 --room P101
  python3 class_schedule.py ... --holidays holidays.ics --database center.db --commit ENG-A1 -o eng-a1.ics
        """
    )

    parser.add_argument(
        "--start-date",
        type=parse_date,
        required=True,
        help="First day of the class (format: YYYY-MM-DD)"
    )

    parser.add_argument(
        "--sessions",
        type=int,
        required=True,
        help="Total number of sessions"
    )

    parser.add_argument(
        "--days",
        type=parse_days,
        required=True,
        help="Comma-separated weekdays, e.g. Mon,Wed,Fri"
    )

    parser.add_argument(
        "--start-time",
        type=parse_time,
        required=True,
        help="Session start time (format: HH:MM)"
    )

    parser.add_argument(
        "--end-time",
        type=parse_time,
        required=True,
        help="Session end time (format: HH:MM)"
    )

    parser.add_argument(
        "--room",
        required=True,
        help="Room identifier, e.g. P101"
    )

    parser.add_argument(
        "--holidays",
        default=None,
        help="iCalendar file listing holidays (default: no holidays)"
    )

    parser.add_argument(
        "--database",
        default=None,
        help="SQLite database with existing classes (default: empty room)"
    )

    parser.add_argument(
        "--exclude-class",
        default=None,
        help="Id of the class being edited; its own slots are ignored"
    )

    parser.add_argument(
        "--any-period",
        action="store_true",
        help="Report conflicts even when the two classes run in different date ranges"
    )

    parser.add_argument(
        "--commit",
        metavar="CLASS_ID",
        default=None,
        help="Store the class under this id when it is valid (requires --database)"
    )

    parser.add_argument(
        "-o", "--output",
        default=None,
        help="Write the session calendar to this .ics file"
    )

    return parser


def main(argv: Optional[list[str]] = None) -> int:
    """Main entry point. Returns the process exit code."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.commit and not args.database:
        parser.error("--commit requires --database")

    output_path = args.output
    if output_path and not output_path.lower().endswith(".ics"):
        output_path = f"{output_path}.ics"

    request = ClassScheduleRequest(
        start_date=args.start_date,
        total_sessions=args.sessions,
        weekdays=args.days,
        time_range=TimeRange(args.start_time, args.end_time),
        room_id=args.room,
        exclude_class_id=args.exclude_class
    )
    strict_period_overlap = not args.any_period

    store: Optional[SqliteSlotRepository] = None
    try:
        holidays = HolidayCalendar.from_ics(args.holidays) if args.holidays else HolidayCalendar()

        repository: ExistingSlotRepository
        if args.database:
            store = SqliteSlotRepository(args.database)
            store.create_schema()
            repository = store
        else:
            repository = InMemorySlotRepository()

        validator = ScheduleValidator(
            holidays, repository, strict_period_overlap=strict_period_overlap
        )
        result = validator.validate(request)

        if isinstance(result, Rejected):
            for error in result.errors:
                print(f"Error: {describe_error(error)}", file=sys.stderr)
            return 1

        print(f"End date: {result.end_date}")
        print(f"Sessions ({len(result.session_dates)}, {result.total_hours(request.time_range):.1f} h):")
        for number, session_date in enumerate(result.session_dates, start=1):
            print(f"  {number:>3}. {session_date} {Weekday.of(session_date).short_label} {request.time_range}")

        if args.commit and store is not None:
            store.commit(args.commit, request, result, strict_period_overlap)
            print(f"Class {args.commit} stored in: {args.database}")

        if output_path:
            transformer = ICalTransformer()
            transformer.transform(request, result, summary=args.commit or f"Class in {args.room}")
            transformer.save(output_path)
            print(f"Sessions saved to: {output_path}")

        return 0

    except KeyboardInterrupt:
        print("\nOperation cancelled by user.", file=sys.stderr)
        return 130
    except ScheduleConflictError as e:
        for conflict in e.conflicts:
            print(f"Error: {describe_error(ScheduleConflictError(conflict))}", file=sys.stderr)
        return 1
    except DuplicateClassError as e:
        print(f"Error: {describe_error(e)}", file=sys.stderr)
        return 1
    except PersistenceError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except (OSError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except Exception as e:
        print(f"Error: An unexpected error occurred: {e}", file=sys.stderr)
        return 1
    finally:
        if store is not None:
            store.close()


if __name__ == "__main__":
    sys.exit(main())

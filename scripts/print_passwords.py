"""Print the derived portal password of every current student.

Usage: python scripts/print_passwords.py [--month YYYY-MM] [--csv student_passwords.csv]
"""

from __future__ import annotations

import argparse
import importlib
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from dotenv import load_dotenv

from config import get_settings_module

from src.student_portal.student_portal.common.datetime_utils import month_bounds, today_local
from src.student_portal.student_portal.container import build_container
from src.student_portal.student_portal.credentials.roster import build_roster, write_roster_csv


def parse_month(value: str) -> tuple[int, int]:
    try:
        year, month = (int(p) for p in value.split("-", 1))
    except ValueError:
        raise argparse.ArgumentTypeError("expected YYYY-MM") from None
    if not 1 <= month <= 12:
        raise argparse.ArgumentTypeError("month must be 01-12")
    return year, month


def main(argv: list[str] | None = None) -> int:
    today = today_local()
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument("--month", type=parse_month, default=(today.year, today.month))
    parser.add_argument("--csv", default="student_passwords.csv")
    args = parser.parse_args(argv)

    load_dotenv(override=False)
    settings = importlib.import_module(get_settings_module())
    container = build_container(
        airtable_config=dict(settings.AIRTABLE_CONFIG),
        portal_config=dict(settings.PORTAL_CONFIG),
    )

    start, end = month_bounds(*args.month)
    try:
        students = container.students_repo.list_all()
        courses = container.courses_repo.list_all()
    finally:
        container.client.close()

    roster = build_roster(students, courses, container.deriver, start=start, end_exclusive=end)

    print(f"Found {roster.matched_courses} course(s) running in {start:%Y-%m}")
    if not roster.filtered:
        print("No students linked to those courses; showing all students instead.")
    print()

    for r in roster.rows:
        print(f"{r.alias} ({r.identity_token}): {r.secret}")
    print(f"\nTotal: {len(roster.rows)} students")

    with open(args.csv, "w", encoding="utf-8", newline="") as fh:
        write_roster_csv(roster.rows, fh)
    print(f"Also wrote {args.csv}")
    return 0


if __name__ == "__main__":
    sys.exit(main())

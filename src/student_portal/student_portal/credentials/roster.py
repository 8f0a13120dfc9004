from __future__ import annotations

import csv
from dataclasses import dataclass
from datetime import date
from typing import IO, Iterable, Sequence

from ..common.text import collation_key
from ..courses.model import CourseWindow
from ..students.model import StudentRecord
from .deriver import CredentialDeriver
from .identity import resolve_identity_token

CSV_HEADER = ("Preferred Name", "Student ID", "Password")


@dataclass(frozen=True)
class RosterRow:
    alias: str
    identity_token: str
    secret: str
    course_ids: tuple[str, ...] = ()


@dataclass(frozen=True)
class Roster:
    rows: list[RosterRow]
    matched_courses: int
    filtered: bool


def build_roster(
    students: Iterable[StudentRecord],
    courses: Iterable[CourseWindow],
    deriver: CredentialDeriver,
    *,
    start: date,
    end_exclusive: date,
) -> Roster:
    """Credentials of students linked to a course running in [start, end).

    When no student matches, every student with a derivable identity is
    listed instead (filtered=False).
    """
    current_ids = {c.course_id for c in courses if c.overlaps(start, end_exclusive)}

    everyone: list[RosterRow] = []
    for s in students:
        token = resolve_identity_token(s.name, s.student_id)
        if not s.preferred_name or not token:
            continue
        everyone.append(
            RosterRow(
                alias=s.preferred_name,
                identity_token=token,
                secret=deriver.derive(token),
                course_ids=s.course_ids,
            )
        )

    current = [r for r in everyone if current_ids.intersection(r.course_ids)]
    filtered = bool(current)
    rows = current if filtered else everyone
    rows.sort(key=lambda r: collation_key(r.alias))
    return Roster(rows=rows, matched_courses=len(current_ids), filtered=filtered)


def write_roster_csv(rows: Sequence[RosterRow], out: IO[str]) -> None:
    writer = csv.writer(out, quoting=csv.QUOTE_ALL, lineterminator="\n")
    writer.writerow(CSV_HEADER)
    for r in rows:
        writer.writerow((r.alias, r.identity_token, r.secret))

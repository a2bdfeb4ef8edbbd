"""
Two-pass catalog loader.

Pass 1 parses every line of the source independently into Course values,
recording one error per malformed line and carrying on. Pass 2 inserts the
accepted courses into the catalog tree in arrival order; that order decides
the tree shape, and with it which of several same-numbered courses a lookup
returns.

Line format (no header, no quoting):
  COURSE_NUMBER,COURSE_NAME[,PREREQ,PREREQ,...]
"""

from __future__ import annotations

import os
from typing import Iterable

from catalog import Catalog
from course import Course
from normalizer import clean_prereq_tokens, split_fields

INVALID_LINE_MESSAGE = "Invalid course data format"


class CatalogSourceError(Exception):
    """The catalog file could not be opened or decoded. Nothing was loaded."""

    def __init__(self, path: str, cause: Exception):
        super().__init__(f"Could not read catalog source '{path}': {cause}")
        self.path = path
        self.cause = cause


class LineError:
    """A rejected source line."""

    def __init__(self, line_number: int, raw: str, message: str = INVALID_LINE_MESSAGE):
        self.line_number = line_number
        self.raw = raw
        self.message = message

    def __repr__(self) -> str:
        return f"LineError(line={self.line_number}, raw={self.raw!r})"

    def __str__(self) -> str:
        return f"line {self.line_number}: {self.message}: {self.raw!r}"


class LoadReport:
    """Collects accepted courses and per-line errors for one load."""

    def __init__(self, source: str = "<lines>"):
        self.source = source
        self.courses: list[Course] = []
        self.errors: list[LineError] = []

    def accept(self, course: Course) -> None:
        self.courses.append(course)

    def reject(self, line_number: int, raw: str) -> None:
        self.errors.append(LineError(line_number, raw))

    @property
    def accepted(self) -> int:
        return len(self.courses)

    @property
    def rejected(self) -> int:
        return len(self.errors)

    def summary(self) -> str:
        lines = [
            f"[INFO] Loaded {self.accepted} course(s) from {self.source} "
            f"({self.rejected} line(s) rejected)"
        ]
        for err in self.errors:
            lines.append(f"  [WARN]  {err}")
        return "\n".join(lines)


def parse_course_line(line: str) -> Course | None:
    """
    Parses one source line into a Course.

    Returns None when the course number or course name is missing or empty.
    Everything after the second field is a prerequisite course number.
    """
    fields = split_fields(line)
    if len(fields) < 2:
        return None
    number, name = fields[0], fields[1]
    if not number or not name:
        return None
    return Course(number, name, clean_prereq_tokens(fields[2:]))


def read_courses(lines: Iterable[str], source: str = "<lines>") -> LoadReport:
    """Pass 1: parse every line, keeping accepted courses in arrival order."""
    report = LoadReport(source)
    for line_number, line in enumerate(lines, start=1):
        course = parse_course_line(line)
        if course is None:
            report.reject(line_number, line.rstrip("\r\n"))
            continue
        report.accept(course)
    return report


def load_catalog(catalog: Catalog, path: str) -> LoadReport:
    """
    Reads `path` and bulk-inserts its valid courses into `catalog`.

    Raises CatalogSourceError when the file cannot be read; the catalog is
    untouched in that case. Malformed lines never abort the load.
    """
    source = os.fspath(path)
    try:
        with open(source, encoding="utf-8-sig", newline="") as fh:
            report = read_courses(fh, source=source)
    except (OSError, UnicodeDecodeError) as exc:
        raise CatalogSourceError(source, exc) from exc

    catalog.add_courses(report.courses)
    return report

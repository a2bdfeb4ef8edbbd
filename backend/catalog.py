from __future__ import annotations

from typing import Iterable, Iterator, Optional

import pandas as pd

from course import Course
from course_tree import CourseTree

FRAME_COLUMNS = ["course_number", "course_name", "prerequisites", "prereq_count"]


class Catalog:
    """The course tree plus every course accepted by a load, in arrival order.

    A Catalog starts empty. Loads are cumulative: each one appends its courses
    to `courses` and inserts them into the same tree. Nothing is ever reset.
    """

    def __init__(self):
        self.tree = CourseTree()
        self.courses: list[Course] = []

    def add_courses(self, courses: Iterable[Course]) -> int:
        """Insert `courses` into the tree in the given order. Returns the count."""
        added = 0
        for course in courses:
            self.courses.append(course)
            self.tree.insert(course)
            added += 1
        return added

    def find(self, course_number: str) -> Optional[Course]:
        return self.tree.find(course_number)

    def sorted_courses(self) -> Iterator[Course]:
        """Fresh in-order traversal on every call."""
        return iter(self.tree)

    @property
    def is_empty(self) -> bool:
        return self.tree.is_empty

    def __len__(self) -> int:
        return len(self.tree)

    def to_frame(self) -> pd.DataFrame:
        """Sorted listing as a DataFrame (one row per tree node)."""
        rows = [course.to_dict() for course in self.sorted_courses()]
        if not rows:
            return pd.DataFrame(columns=FRAME_COLUMNS)
        return pd.DataFrame(rows, columns=FRAME_COLUMNS)

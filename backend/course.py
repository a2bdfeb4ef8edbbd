from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class Course:
    """One catalog entry: course number, course name and prerequisite numbers.

    Construction never validates. The loader decides whether a line is good
    enough to become a Course; prerequisites are kept in file order and are
    not checked against the catalog.
    """

    course_number: str
    course_name: str
    prerequisites: tuple[str, ...] = field(default_factory=tuple)

    def __post_init__(self):
        # Accept any iterable of tokens but store an immutable tuple.
        object.__setattr__(self, "prerequisites", tuple(self.prerequisites))

    @property
    def has_prerequisites(self) -> bool:
        return len(self.prerequisites) > 0

    def to_dict(self) -> dict:
        return {
            "course_number": self.course_number,
            "course_name": self.course_name,
            "prerequisites": list(self.prerequisites),
            "prereq_count": len(self.prerequisites),
        }

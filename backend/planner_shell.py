"""
Interactive course planner menu.

Usage:
    course-planner
    python backend/planner_shell.py

Reads the catalog from CATALOG_PATH (or the bundled default catalog) when
option 1 is chosen. Loads are cumulative within one run.
"""

import os
import sys

# Ensure backend/ is on sys.path so sibling imports work
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from dotenv import load_dotenv

from catalog import Catalog
from catalog_loader import INVALID_LINE_MESSAGE, CatalogSourceError, load_catalog
from normalizer import normalize_query
from settings import resolve_catalog_path

MENU_TEXT = (
    "\n******* Course Planner *******\n"
    "1. Load Data Structure.\n"
    "2. Print Course List.\n"
    "3. Print Course.\n"
    "9. Exit\n"
)
CHOICE_PROMPT = "\nWhat would you like to do? "
COURSE_PROMPT = "Enter course number: "

CHOICE_LOAD = "1"
CHOICE_LIST = "2"
CHOICE_COURSE = "3"
CHOICE_EXIT = "9"


class PlannerShell:
    """Menu loop over one Catalog. `input_fn` / `print_fn` are swappable for tests."""

    def __init__(self, catalog: Catalog | None = None, catalog_path: str | None = None,
                 input_fn=None, print_fn=None):
        self.catalog = catalog if catalog is not None else Catalog()
        self.catalog_path = catalog_path or resolve_catalog_path()
        self._input = input_fn or input
        self._print = print_fn or print

    # ── Menu actions ──────────────────────────────────────────────────────────

    def load(self) -> bool:
        try:
            report = load_catalog(self.catalog, self.catalog_path)
        except CatalogSourceError:
            self._print("Error: Could not open the file.")
            return False
        for _ in report.errors:
            self._print(f"Error: {INVALID_LINE_MESSAGE}")
        self._print("Courses loaded successfully.")
        return True

    def print_course_list(self) -> None:
        if self.catalog.is_empty:
            self._print("No courses loaded.")
            return
        for course in self.catalog.sorted_courses():
            self._print(f"{course.course_number}, {course.course_name}")

    def print_course(self, raw_number: str) -> None:
        number = normalize_query(raw_number)
        course = self.catalog.find(number) if number is not None else None
        if course is None:
            self._print("Course not found.")
            return
        self._print(f"Course Number: {course.course_number}, Course Name: {course.course_name}")
        if course.has_prerequisites:
            self._print("Prerequisites: " + " ".join(course.prerequisites))
        else:
            self._print("No prerequisites")

    # ── Loop ──────────────────────────────────────────────────────────────────

    def run(self) -> int:
        """Runs until option 9 (or end of input). Returns the exit status."""
        while True:
            self._print(MENU_TEXT, end="")
            try:
                choice = self._input(CHOICE_PROMPT).strip()
            except EOFError:
                choice = CHOICE_EXIT

            if choice == CHOICE_LOAD:
                self.load()
            elif choice == CHOICE_LIST:
                self.print_course_list()
            elif choice == CHOICE_COURSE:
                try:
                    raw_number = self._input(COURSE_PROMPT)
                except EOFError:
                    raw_number = ""
                self.print_course(raw_number)
            elif choice == CHOICE_EXIT:
                self._print("Thank you for using the course planner!")
                return 0
            else:
                self._print(f"{choice} is not a valid option.")


def main() -> int:
    load_dotenv()
    return PlannerShell().run()


if __name__ == "__main__":
    raise SystemExit(main())

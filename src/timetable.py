"""
In-memory timetable held by the host page for one session.

Keeps committed course records in entry order, each under a generated
course id so that two courses may share a display name. Derives the
allocation set that the draft controller needs on every open.
"""

import itertools
import logging
from collections import Counter
from typing import Dict, List, Optional, Set, Tuple

import pandas as pd

from models import CourseRecord, EditContext

logger = logging.getLogger(__name__)


TABLE_COLUMNS = ["course", "slots", "credits", "faculty", "lab"]


class Timetable:
    def __init__(self):
        self._courses: Dict[str, CourseRecord] = {}
        self._ids = itertools.count(1)

    @property
    def courses(self) -> List[CourseRecord]:
        return list(self._courses.values())

    def entries(self) -> List[Tuple[str, CourseRecord]]:
        """(course id, record) pairs in entry order."""
        return list(self._courses.items())

    def __len__(self):
        return len(self._courses)

    def __contains__(self, course_id):
        return course_id in self._courses

    def get(self, course_id: str) -> Optional[CourseRecord]:
        return self._courses.get(course_id)

    def ids_named(self, name: str) -> List[str]:
        return [cid for cid, r in self._courses.items() if r.name == name]

    # ---------------------------------------------------------
    # Mutation
    # ---------------------------------------------------------

    def add(self, record: CourseRecord) -> str:
        """Stores a course and returns its new id."""
        course_id = f"course-{next(self._ids)}"
        if self.ids_named(record.name):
            logger.info("Another course is already named %s", record.name)
        self._courses[course_id] = record
        return course_id

    def replace(self, course_id: str, record: CourseRecord) -> str:
        """
        Swaps the course stored under `course_id` for `record`, keeping its
        position and id. Unknown ids are added at the end under a new id.
        """
        if course_id not in self._courses:
            return self.add(record)
        self._courses[course_id] = record
        return course_id

    def remove(self, course_id: str) -> bool:
        return self._courses.pop(course_id, None) is not None

    # ---------------------------------------------------------
    # Derived views
    # ---------------------------------------------------------

    def existing_slots(self, excluding: Optional[str] = None) -> Set[str]:
        taken: Set[str] = set()
        for course_id, record in self._courses.items():
            if course_id == excluding:
                continue
            taken.update(record.slots)
        return taken

    def edit_context_for(self, course_id: str) -> Optional[EditContext]:
        record = self._courses.get(course_id)
        if record is None:
            return None
        return EditContext(
            name=record.name,
            slots=list(record.slots),
            credits=record.credits,
            faculty_preferences=list(record.faculty_preferences),
            lab_assignments=(
                {f: list(s) for f, s in record.faculty_lab_assignments.items()}
                if record.faculty_lab_assignments else None
            ),
        )

    @property
    def total_credits(self) -> int:
        return sum(r.credits for r in self._courses.values())

    def clashes(self) -> Dict[str, List[str]]:
        """Slot code -> course names, for every code claimed more than once."""
        counts = Counter(s for r in self._courses.values() for s in r.slots)
        return {
            slot: [r.name for r in self._courses.values() if slot in r.slots]
            for slot, n in counts.items() if n > 1
        }

    def as_dataframe(self) -> pd.DataFrame:
        rows = []
        for r in self._courses.values():
            labs = r.faculty_lab_assignments or {}
            rows.append({
                "course": r.name,
                "slots": "+".join(r.slots),
                "credits": r.credits,
                "faculty": ", ".join(r.faculty_preferences),
                "lab": "; ".join(f"{f}: {'+'.join(s)}" for f, s in labs.items())
                if r.include_lab_course else "",
            })
        return pd.DataFrame(rows, columns=TABLE_COLUMNS)

# models.py
"""
Domain models for the course slot selector.
These are used by:
- course draft controller (edit context in, course record out)
- faculty preference hand-off (request / submission / cancellation)
- host timetable and Streamlit UI
"""

import math
import re
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Union

from config import MIN_CREDITS, MAX_CREDITS


_LEADING_INT_RE = re.compile(r"\s*([+-]?\d+)")


def clamp_credits(value) -> int:
    """
    Clamps into [MIN_CREDITS, MAX_CREDITS].

    Text is read up to its leading integer ("4.0" -> 4, "3abc" -> 3); text
    without one becomes MIN_CREDITS. Numbers are truncated; +inf clamps to
    MAX_CREDITS, -inf and NaN to MIN_CREDITS.
    """
    if isinstance(value, int):
        n = value
    elif isinstance(value, str):
        m = _LEADING_INT_RE.match(value)
        n = int(m.group(1)) if m else MIN_CREDITS
    else:
        try:
            f = float(value)
        except (TypeError, ValueError):
            f = float(MIN_CREDITS)
        if math.isnan(f):
            n = MIN_CREDITS
        elif math.isinf(f):
            n = MAX_CREDITS if f > 0 else MIN_CREDITS
        else:
            n = int(f)
    return max(MIN_CREDITS, min(MAX_CREDITS, n))


def _dedupe(items) -> List[str]:
    out: List[str] = []
    for item in items or []:
        if item not in out:
            out.append(item)
    return out


# ======================================================================
# Edit context
# ======================================================================

@dataclass
class EditContext:
    """
    Prior state of a course being modified.

    slots:           the course's own slots; never reported as taken
    lab_assignments: faculty name -> lab slot codes, if the course had a lab
    """

    name: str
    slots: List[str]
    credits: int
    faculty_preferences: List[str] = field(default_factory=list)
    lab_assignments: Optional[Dict[str, List[str]]] = None

    def __post_init__(self):
        self.slots = _dedupe(self.slots)
        self.faculty_preferences = list(self.faculty_preferences or [])


# ======================================================================
# Course record (what the host receives)
# ======================================================================

@dataclass
class CourseRecord:
    name: str
    slots: List[str]
    credits: int
    faculty_preferences: List[str] = field(default_factory=list)
    include_lab_course: bool = False
    faculty_lab_assignments: Optional[Dict[str, List[str]]] = None

    def __post_init__(self):
        if not MIN_CREDITS <= self.credits <= MAX_CREDITS:
            raise ValueError(f"Credits out of range for CourseRecord: {self.credits!r}")
        self.slots = list(self.slots)
        self.faculty_preferences = list(self.faculty_preferences)

    @property
    def label(self) -> str:
        return f"{self.name} {'+'.join(self.slots)}"

    def as_dict(self):
        d = {
            "name": self.name,
            "slots": list(self.slots),
            "credits": self.credits,
            "faculty_preferences": list(self.faculty_preferences),
            "include_lab_course": self.include_lab_course,
        }
        if self.faculty_lab_assignments is not None:
            d["faculty_lab_assignments"] = {
                fac: list(slots) for fac, slots in self.faculty_lab_assignments.items()
            }
        return d


# ======================================================================
# Faculty preference hand-off
# ======================================================================

@dataclass
class FacultyPreferenceRequest:
    """What the faculty/lab preference collaborator is seeded with."""

    course_label: str
    initial_faculty_preferences: List[str] = field(default_factory=list)


@dataclass
class FacultySubmission:
    faculty_preferences: List[str]
    include_lab_course: bool = False
    faculty_lab_assignments: Optional[Dict[str, List[str]]] = None


@dataclass
class FacultyCancellation:
    """The collaborator was closed without submitting."""

    reason: str = ""


FacultyReply = Union[FacultySubmission, FacultyCancellation]

"""
Helpers behind the faculty/lab preference form on the host page.

The form's widget values live in a mapping (Streamlit's session state);
these functions read that mapping and build the reply for the draft.
"""

from typing import Dict, List, Mapping

from models import FacultyPreferenceRequest, FacultySubmission
from slot_parser import parse_lab_slots

NAMES_KEY = "faculty_names"
INCLUDE_LAB_KEY = "faculty_include_lab"
KEY_PREFIX = "faculty_"


def heading(request: FacultyPreferenceRequest) -> str:
    return f"Faculty Preferences: {request.course_label}"


def parse_faculty_names(raw: str) -> List[str]:
    """One name per line, blank lines skipped, first occurrence kept."""
    names: List[str] = []
    for line in (raw or "").splitlines():
        n = line.strip()
        if n and n not in names:
            names.append(n)
    return names


def lab_key(faculty: str) -> str:
    # keyed by name so typed slots follow the faculty when lines move
    return f"{KEY_PREFIX}lab::{faculty}"


def lab_assignments(names: List[str], state: Mapping) -> Dict[str, List[str]]:
    return {fac: parse_lab_slots(state.get(lab_key(fac), "")) for fac in names}


def read_submission(state: Mapping) -> FacultySubmission:
    names = parse_faculty_names(state.get(NAMES_KEY, ""))
    include_lab = bool(state.get(INCLUDE_LAB_KEY, False))
    return FacultySubmission(
        faculty_preferences=names,
        include_lab_course=include_lab,
        faculty_lab_assignments=lab_assignments(names, state) if include_lab else None,
    )

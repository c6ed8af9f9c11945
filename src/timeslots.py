# timeslots.py
#
# Authoritative slot catalog of the institutional timetable grid.
#
# Theory slots come in two disjoint groups:
#   morning: A1 ... G1, TA1 ... TG1, TAA1, TCC1
#   evening: A2 ... G2, TA2 ... TF2, TAA2, TBB2, TCC2, TDD2
#
# Lab slots (L1 ... L60) are kept apart: they are only used when a course
# carries a lab component and a faculty member is assigned lab slots.

from typing import List, Tuple

from config import MORNING, EVENING, GRID_ROW_WIDTH


# ============================================================
#  THEORY SLOTS
# ============================================================

MORNING_THEORY_SLOTS: Tuple[str, ...] = (
    "A1", "B1", "C1", "D1", "E1", "F1", "G1",
    "TA1", "TB1", "TC1", "TD1", "TE1", "TF1", "TG1",
    "TAA1", "TCC1",
)

EVENING_THEORY_SLOTS: Tuple[str, ...] = (
    "A2", "B2", "C2", "D2", "E2", "F2", "G2",
    "TA2", "TB2", "TC2", "TD2", "TE2", "TF2",
    "TAA2", "TBB2", "TCC2", "TDD2",
)

# Union of both groups, morning first
ALL_THEORY_SLOTS: Tuple[str, ...] = MORNING_THEORY_SLOTS + EVENING_THEORY_SLOTS

THEORY_GROUPS = {
    MORNING: MORNING_THEORY_SLOTS,
    EVENING: EVENING_THEORY_SLOTS,
}


# ============================================================
#  LAB SLOTS
# ============================================================

MORNING_LAB_SLOTS: Tuple[str, ...] = tuple(f"L{i}" for i in range(1, 31))
EVENING_LAB_SLOTS: Tuple[str, ...] = tuple(f"L{i}" for i in range(31, 61))
ALL_LAB_SLOTS: Tuple[str, ...] = MORNING_LAB_SLOTS + EVENING_LAB_SLOTS

LAB_GROUPS = {
    MORNING: MORNING_LAB_SLOTS,
    EVENING: EVENING_LAB_SLOTS,
}

# Helper sets for O(1) membership checks
_THEORY_LOOKUP = frozenset(ALL_THEORY_SLOTS)
_LAB_LOOKUP = frozenset(ALL_LAB_SLOTS)


def is_valid(code) -> bool:
    """True if `code` is a theory slot of either group."""
    return code in _THEORY_LOOKUP


def is_lab_slot(code) -> bool:
    return code in _LAB_LOOKUP


def group(mode: str) -> List[str]:
    """
    Theory slots shown for a display mode.

    Only "evening" selects the evening group; "morning", "custom" and
    anything else fall back to the morning group.
    """
    if mode == EVENING:
        return list(EVENING_THEORY_SLOTS)
    return list(MORNING_THEORY_SLOTS)


def lab_group(mode: str) -> List[str]:
    if mode == EVENING:
        return list(EVENING_LAB_SLOTS)
    return list(MORNING_LAB_SLOTS)


def slot_rows(mode: str, width: int = GRID_ROW_WIDTH) -> List[List[str]]:
    """Displayed group chunked into rows of `width` codes for the toggle grid."""
    width = max(1, width)
    slots = group(mode)
    return [slots[i:i + width] for i in range(0, len(slots), width)]

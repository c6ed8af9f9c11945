"""
Slot pattern parsing.

Turns what the user types ("A1+TG1", "a1, B1  C1", "A1++TG1") into an
ordered, de-duplicated list of catalog codes. Parsing is permissive:
unknown tokens are dropped without complaint because the text is usually
half-typed.

The slot list is the single source of truth; the text field is only ever a
projection of it (`render`) or an input to it (`parse`).
"""

import re
from typing import Callable, Iterable, List

from config import SLOT_DELIMITERS, SLOT_JOINER
from timeslots import is_valid, is_lab_slot


_DELIMITER_RE = re.compile(SLOT_DELIMITERS)


def _tokens(text: str) -> List[str]:
    if not text:
        return []
    return [t for t in _DELIMITER_RE.split(str(text)) if t]


def _filter_ordered(tokens: Iterable[str], accept: Callable[[str], bool]) -> List[str]:
    out: List[str] = []
    seen = set()
    for tok in tokens:
        if tok in seen or not accept(tok):
            continue
        seen.add(tok)
        out.append(tok)
    return out


def parse(text: str) -> List[str]:
    """Valid theory slot codes in `text`, in order of first appearance."""
    return _filter_ordered(_tokens(text), is_valid)


def parse_lab_slots(text: str) -> List[str]:
    """Same rules as `parse`, against the lab slot catalog."""
    return _filter_ordered(_tokens(text), is_lab_slot)


def render(slots: Iterable[str]) -> str:
    return SLOT_JOINER.join(slots)


def toggle(slots: List[str], code: str) -> List[str]:
    """
    Returns a new list with `code` removed if present, appended if absent.
    The caller decides whether the code may be selected at all.
    """
    if code in slots:
        return [s for s in slots if s != code]
    return list(slots) + [code]

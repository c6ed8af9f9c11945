"""
Course draft controller.

Owns the course being entered in the slot dialog and sequences its two-stage
commit:

    open → EDITING ──submit_without_faculty──────────────→ SUBMITTED
                 └─request_faculty_preferences→ AWAITING_FACULTY_PREFS
                                                 ├─receive_faculty_preferences→ SUBMITTED
                                                 └─cancel────────────────────→ CANCELLED

Nothing here raises on user input: credits are clamped, unknown slot tokens
are dropped, toggles of taken slots are ignored and failed submission guards
return None.

Edits never go through the faculty step; an edited course keeps the faculty
preferences it already had. Editors therefore cannot change faculty
preferences from this dialog.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Callable, FrozenSet, Iterable, List, Optional

import slot_parser
import timeslots
from config import DEFAULT_CREDITS, DEFAULT_GROUP
from models import (
    CourseRecord,
    EditContext,
    FacultyCancellation,
    FacultyPreferenceRequest,
    FacultyReply,
    FacultySubmission,
    clamp_credits,
)

logger = logging.getLogger(__name__)


class DraftState(str, Enum):
    EMPTY = "empty"
    EDITING = "editing"
    AWAITING_FACULTY_PREFS = "awaiting_faculty_prefs"
    SUBMITTED = "submitted"
    CANCELLED = "cancelled"


TERMINAL_STATES = {DraftState.SUBMITTED, DraftState.CANCELLED}


@dataclass(frozen=True)
class DraftSnapshot:
    """Course details frozen when control passes to the faculty step."""

    name: str
    slots: tuple
    credits: int


class CourseDraftController:
    """
    One controller per dialog. It may be re-opened any number of times; each
    open starts from a clean draft.

    on_submit:          called with the finished CourseRecord
    on_request_faculty: called with a FacultyPreferenceRequest when the
                        faculty step takes over
    """

    def __init__(
        self,
        on_submit: Optional[Callable[[CourseRecord], None]] = None,
        on_request_faculty: Optional[Callable[[FacultyPreferenceRequest], None]] = None,
    ):
        self.on_submit = on_submit
        self.on_request_faculty = on_request_faculty

        self.state = DraftState.EMPTY
        self.preferred_group = DEFAULT_GROUP
        self._existing: FrozenSet[str] = frozenset()
        self._edit: Optional[EditContext] = None
        self._snapshot: Optional[DraftSnapshot] = None
        self._reset_fields()

    # ------------------------------------------------------------------
    # Read-only projections
    # ------------------------------------------------------------------

    @property
    def name(self) -> str:
        return self._name

    @property
    def credits(self) -> int:
        return self._credits

    @property
    def slots(self) -> List[str]:
        return list(self._slots)

    @property
    def slot_text(self) -> str:
        return slot_parser.render(self._slots)

    @property
    def edit_context(self) -> Optional[EditContext]:
        return self._edit

    @property
    def is_editing_existing(self) -> bool:
        return self._edit is not None

    @property
    def snapshot(self) -> Optional[DraftSnapshot]:
        return self._snapshot

    def slot_rows(self) -> List[List[str]]:
        return timeslots.slot_rows(self.preferred_group)

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def open(
        self,
        existing_slots: Iterable[str] = (),
        edit_context: Optional[EditContext] = None,
        preferred_group: str = DEFAULT_GROUP,
    ) -> None:
        self._existing = frozenset(existing_slots or ())
        self._edit = edit_context
        self._snapshot = None
        self.preferred_group = preferred_group or DEFAULT_GROUP

        self._reset_fields()
        if edit_context is not None:
            self._name = edit_context.name
            self._credits = clamp_credits(edit_context.credits)
            self._slots = [s for s in edit_context.slots if timeslots.is_valid(s)]

        self._transition(DraftState.EDITING)

    def cancel(self) -> bool:
        """Discards the draft and any snapshot. No-op once terminal."""
        if self.state in TERMINAL_STATES:
            return False
        self._discard()
        self._transition(DraftState.CANCELLED)
        return True

    # ------------------------------------------------------------------
    # Setters (EDITING only)
    # ------------------------------------------------------------------

    def set_name(self, text: str) -> None:
        if self._accepts_edits():
            self._name = "" if text is None else str(text)

    def set_credits(self, value) -> None:
        if self._accepts_edits():
            self._credits = clamp_credits(value)

    def step_credits(self, delta: int) -> None:
        if self._accepts_edits():
            self._credits = clamp_credits(self._credits + int(delta))

    def set_slot_text(self, text: str) -> None:
        if not self._accepts_edits():
            return
        parsed = slot_parser.parse(text)
        dropped = [s for s in parsed if self.is_taken(s)]
        if dropped:
            logger.debug("Ignoring taken slots in typed pattern: %s", dropped)
        self._slots = [s for s in parsed if not self.is_taken(s)]

    def toggle_slot(self, code: str) -> bool:
        """Returns True if the selection changed."""
        if not self._accepts_edits():
            return False
        if not timeslots.is_valid(code):
            logger.debug("Ignoring toggle of unknown slot %r", code)
            return False
        if self.is_taken(code):
            logger.debug("Ignoring toggle of taken slot %s", code)
            return False
        self._slots = slot_parser.toggle(self._slots, code)
        return True

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def is_taken(self, code: str) -> bool:
        if self._edit is not None and code in self._edit.slots:
            return False
        return code in self._existing

    def can_submit(self) -> bool:
        return bool(self._name.strip()) and len(self._slots) > 0

    # ------------------------------------------------------------------
    # Submission
    # ------------------------------------------------------------------

    def submit_without_faculty(self) -> Optional[CourseRecord]:
        if self.state != DraftState.EDITING or not self.can_submit():
            return None

        prefs = list(self._edit.faculty_preferences) if self._edit else []
        record = CourseRecord(
            name=self._name,
            slots=list(self._slots),
            credits=self._credits,
            faculty_preferences=prefs,
            include_lab_course=False,
        )
        return self._emit(record)

    def request_faculty_preferences(self) -> Optional[FacultyPreferenceRequest]:
        if self.state != DraftState.EDITING or not self.can_submit():
            return None
        if self._edit is not None:
            # edited courses are confirmed directly
            return None

        self._snapshot = DraftSnapshot(
            name=self._name,
            slots=tuple(self._slots),
            credits=self._credits,
        )
        request = FacultyPreferenceRequest(
            course_label=f"{self._name} {slot_parser.render(self._slots)}",
            initial_faculty_preferences=(
                list(self._edit.faculty_preferences) if self._edit else []
            ),
        )
        self._transition(DraftState.AWAITING_FACULTY_PREFS)

        if self.on_request_faculty is not None:
            self.on_request_faculty(request)
        return request

    def receive_faculty_preferences(
        self,
        faculty_preferences: Iterable[str],
        include_lab_course: bool = False,
        faculty_lab_assignments=None,
    ) -> Optional[CourseRecord]:
        if self.state != DraftState.AWAITING_FACULTY_PREFS or self._snapshot is None:
            logger.debug("Faculty preferences received in state %s; ignored", self.state.value)
            return None

        labs = None
        if include_lab_course and faculty_lab_assignments is not None:
            labs = {}
            for faculty, lab_slots in dict(faculty_lab_assignments).items():
                labs[faculty] = []
                for s in lab_slots or []:
                    if s not in labs[faculty]:
                        labs[faculty].append(s)

        snap = self._snapshot
        record = CourseRecord(
            name=snap.name,
            slots=list(snap.slots),
            credits=snap.credits,
            faculty_preferences=list(faculty_preferences or []),
            include_lab_course=bool(include_lab_course),
            faculty_lab_assignments=labs,
        )
        return self._emit(record)

    def resume(self, reply: FacultyReply) -> Optional[CourseRecord]:
        """Single entry point for the faculty step's answer."""
        if isinstance(reply, FacultySubmission):
            return self.receive_faculty_preferences(
                reply.faculty_preferences,
                reply.include_lab_course,
                reply.faculty_lab_assignments,
            )
        if isinstance(reply, FacultyCancellation):
            if self.state == DraftState.AWAITING_FACULTY_PREFS:
                logger.info("Faculty step cancelled (%s); draft discarded", reply.reason or "no reason")
                self.cancel()
            return None
        raise TypeError(f"Unknown faculty reply: {reply!r}")

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _accepts_edits(self) -> bool:
        if self.state != DraftState.EDITING:
            logger.debug("Draft not editable in state %s", self.state.value)
            return False
        return True

    def _reset_fields(self) -> None:
        self._name = ""
        self._credits = DEFAULT_CREDITS
        self._slots: List[str] = []

    def _discard(self) -> None:
        self._reset_fields()
        self._snapshot = None
        self._edit = None
        self._existing = frozenset()

    def _emit(self, record: CourseRecord) -> CourseRecord:
        self._discard()
        self._transition(DraftState.SUBMITTED)
        logger.info("Course submitted: %s (%d credits)", record.label, record.credits)
        if self.on_submit is not None:
            self.on_submit(record)
        return record

    def _transition(self, new_state: DraftState) -> None:
        logger.debug("Draft %s -> %s", self.state.value, new_state.value)
        self.state = new_state

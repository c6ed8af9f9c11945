# app.py
import logging

import streamlit as st

import faculty_form
from config import LOG_LEVEL, PREFERRED_GROUPS, MIN_CREDITS, MAX_CREDITS
from course_draft import CourseDraftController, DraftState
from models import CourseRecord, FacultyCancellation
from timeslots import lab_group
from timetable import Timetable

logging.basicConfig(level=LOG_LEVEL)
logger = logging.getLogger(__name__)


# -----------------------------------------------------------
# Streamlit Config
# -----------------------------------------------------------
st.set_page_config(layout="wide", page_title="Course Slot Selector")  # type: ignore


# -----------------------------------------------------------
# Callbacks wired into the draft controller
# -----------------------------------------------------------

def store_record(record: CourseRecord):
    timetable: Timetable = st.session_state.timetable
    editing = st.session_state.editing_id
    others = [cid for cid in timetable.ids_named(record.name) if cid != editing]
    if editing:
        timetable.replace(editing, record)
        st.toast(f"✅ Updated {record.name}")
    else:
        timetable.add(record)
        st.toast(f"✅ Added {record.name}")
    if others:
        st.toast(f"⚠️ {len(others) + 1} courses are now named {record.name}")
    logger.info("Timetable holds %d courses, %d credits", len(timetable), timetable.total_credits)
    st.session_state.editing_id = None
    st.session_state.faculty_request = None


def remember_faculty_request(request):
    # fresh form for every hand-off
    for key in [k for k in st.session_state if str(k).startswith(faculty_form.KEY_PREFIX)]:
        del st.session_state[key]
    st.session_state.faculty_request = request


# -----------------------------------------------------------
# Session State
# -----------------------------------------------------------
if "timetable" not in st.session_state:
    st.session_state.timetable = Timetable()
if "draft" not in st.session_state:
    st.session_state.draft = CourseDraftController(
        on_submit=store_record,
        on_request_faculty=remember_faculty_request,
    )
if "editing_id" not in st.session_state:
    st.session_state.editing_id = None
if "faculty_request" not in st.session_state:
    st.session_state.faculty_request = None
if "preferred_group" not in st.session_state:
    st.session_state.preferred_group = PREFERRED_GROUPS[0]


draft: CourseDraftController = st.session_state.draft
timetable: Timetable = st.session_state.timetable


# -----------------------------------------------------------
# Helpers: keep widgets in step with the draft
# -----------------------------------------------------------

def sync_widgets():
    st.session_state.draft_name = draft.name
    st.session_state.draft_credits = draft.credits
    st.session_state.draft_slot_text = draft.slot_text


def open_new_course():
    st.session_state.editing_id = None
    st.session_state.faculty_request = None
    draft.open(
        existing_slots=timetable.existing_slots(),
        preferred_group=st.session_state.preferred_group,
    )
    sync_widgets()


def open_edit_course(course_id: str):
    st.session_state.editing_id = course_id
    st.session_state.faculty_request = None
    draft.open(
        existing_slots=timetable.existing_slots(excluding=course_id),
        edit_context=timetable.edit_context_for(course_id),
        preferred_group=st.session_state.preferred_group,
    )
    sync_widgets()


def close_dialog():
    draft.cancel()
    st.session_state.editing_id = None
    st.session_state.faculty_request = None


def on_name_change():
    draft.set_name(st.session_state.draft_name)


def on_credits_change():
    draft.set_credits(st.session_state.draft_credits)


def on_step_credits(delta: int):
    draft.step_credits(delta)
    st.session_state.draft_credits = draft.credits


def on_slot_text_change():
    draft.set_slot_text(st.session_state.draft_slot_text)


def on_toggle(code: str):
    draft.toggle_slot(code)
    st.session_state.draft_slot_text = draft.slot_text


def submit_faculty():
    draft.resume(faculty_form.read_submission(st.session_state))


def cancel_faculty():
    draft.resume(FacultyCancellation(reason="closed"))
    st.session_state.faculty_request = None


# -----------------------------------------------------------
# Sidebar UI
# -----------------------------------------------------------

with st.sidebar:
    st.header("Timetable")

    st.radio(
        "Preferred slot group",
        PREFERRED_GROUPS,
        key="preferred_group",
        horizontal=True,
    )

    st.button("➕ Add Course", type="primary", on_click=open_new_course,
              disabled=draft.state in (DraftState.EDITING, DraftState.AWAITING_FACULTY_PREFS))

    c1, c2 = st.columns(2)
    c1.metric("Courses", len(timetable))
    c2.metric("Credits", timetable.total_credits)

    clashes = timetable.clashes()
    if clashes:
        st.warning("Slot clashes: " + ", ".join(f"{s} ({', '.join(n)})" for s, n in clashes.items()))


# -----------------------------------------------------------
# Course details dialog
# -----------------------------------------------------------

if draft.state == DraftState.EDITING:
    title = "Edit Course" if draft.is_editing_existing else "Enter Course Details"
    with st.container(border=True):
        st.subheader(title)

        col_name, col_minus, col_credits, col_plus = st.columns([8, 1, 2, 1])
        col_name.text_input("Course Name", key="draft_name", on_change=on_name_change,
                            placeholder="Enter course name")
        col_minus.button("-", key="credits_down", on_click=on_step_credits, args=(-1,),
                         disabled=draft.credits <= MIN_CREDITS)
        col_credits.number_input("Credits", min_value=MIN_CREDITS, max_value=MAX_CREDITS,
                                 step=1, key="draft_credits", on_change=on_credits_change)
        col_plus.button("+", key="credits_up", on_click=on_step_credits, args=(1,),
                        disabled=draft.credits >= MAX_CREDITS)

        st.text_input("Slot Pattern (e.g., A1+TG1)", key="draft_slot_text",
                      on_change=on_slot_text_change,
                      placeholder="Enter slot pattern (e.g., A1+TG1)")

        selected = set(draft.slots)
        for row in draft.slot_rows():
            cols = st.columns(len(row))
            for col, code in zip(cols, row):
                col.button(
                    code,
                    key=f"slot_{code}",
                    type="primary" if code in selected else "secondary",
                    disabled=draft.is_taken(code),
                    on_click=on_toggle,
                    args=(code,),
                    use_container_width=True,
                )

        st.caption(f"Selected: {draft.slot_text or 'none'}")

        ready = draft.can_submit()
        if draft.is_editing_existing:
            b1, b2 = st.columns(2)
            b1.button("Cancel", on_click=close_dialog)
            b2.button("Confirm", type="primary", disabled=not ready,
                      on_click=draft.submit_without_faculty)
        else:
            b1, b2, b3 = st.columns(3)
            b1.button("Cancel", on_click=close_dialog)
            b2.button("Skip Faculty", disabled=not ready,
                      on_click=draft.submit_without_faculty)
            b3.button("Add Faculty", type="primary", disabled=not ready,
                      on_click=draft.request_faculty_preferences)


# -----------------------------------------------------------
# Faculty / lab preference dialog
# -----------------------------------------------------------

elif draft.state == DraftState.AWAITING_FACULTY_PREFS and st.session_state.faculty_request:
    request = st.session_state.faculty_request
    with st.container(border=True):
        st.subheader(faculty_form.heading(request))
        if draft.snapshot is not None:
            st.caption(f"{draft.snapshot.credits} credits")

        if faculty_form.NAMES_KEY not in st.session_state:
            st.session_state[faculty_form.NAMES_KEY] = "\n".join(request.initial_faculty_preferences)
        st.text_area("Faculty (one per line, in order of preference)", key=faculty_form.NAMES_KEY)
        names = faculty_form.parse_faculty_names(st.session_state[faculty_form.NAMES_KEY])

        include_lab = st.checkbox("Include lab course", key=faculty_form.INCLUDE_LAB_KEY)
        if include_lab:
            st.caption("Lab slots, e.g. " + "+".join(lab_group(st.session_state.preferred_group)[:2]))
            for fac in names:
                st.text_input(f"Lab slots for {fac}", key=faculty_form.lab_key(fac))

        b1, b2 = st.columns(2)
        b1.button("Cancel", on_click=cancel_faculty)
        b2.button("Submit", type="primary", on_click=submit_faculty)


# -----------------------------------------------------------
# Timetable
# -----------------------------------------------------------

st.header("Courses")

if not len(timetable):
    st.info("No courses yet. Use **Add Course** in the sidebar.")
else:
    st.dataframe(timetable.as_dataframe(), hide_index=True, use_container_width=True)

    busy = draft.state in (DraftState.EDITING, DraftState.AWAITING_FACULTY_PREFS)
    for course_id, record in timetable.entries():
        c1, c2, c3 = st.columns([6, 1, 1])
        c1.markdown(f"**{record.name}** · {'+'.join(record.slots)} · {record.credits} cr")
        c2.button("Edit", key=f"edit_{course_id}", disabled=busy,
                  on_click=open_edit_course, args=(course_id,))
        c3.button("Remove", key=f"remove_{course_id}", disabled=busy,
                  on_click=timetable.remove, args=(course_id,))

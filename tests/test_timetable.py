import pytest

from course_draft import CourseDraftController
from models import CourseRecord
from timetable import TABLE_COLUMNS, Timetable


@pytest.fixture
def timetable():
    tt = Timetable()
    tt.add(CourseRecord(name="Algorithms", slots=["A1", "TG1"], credits=3))
    tt.add(CourseRecord(
        name="OS", slots=["D1"], credits=4, faculty_preferences=["Dr.X"],
        include_lab_course=True, faculty_lab_assignments={"Dr.X": ["L1", "L2"]},
    ))
    return tt


@pytest.fixture
def os_id(timetable):
    return timetable.ids_named("OS")[0]


def test_add_returns_distinct_ids(timetable):
    ids = [cid for cid, _ in timetable.entries()]
    assert len(set(ids)) == 2
    assert [r.name for r in timetable.courses] == ["Algorithms", "OS"]


def test_existing_slots(timetable, os_id):
    assert timetable.existing_slots() == {"A1", "TG1", "D1"}
    assert timetable.existing_slots(excluding=os_id) == {"A1", "TG1"}


def test_total_credits(timetable):
    assert timetable.total_credits == 7


def test_edit_context_for(timetable, os_id):
    ctx = timetable.edit_context_for(os_id)
    assert ctx.name == "OS"
    assert ctx.slots == ["D1"]
    assert ctx.credits == 4
    assert ctx.faculty_preferences == ["Dr.X"]
    assert ctx.lab_assignments == {"Dr.X": ["L1", "L2"]}
    assert timetable.edit_context_for("course-999") is None


def test_same_name_courses_are_both_kept(timetable):
    second = timetable.add(CourseRecord(name="OS", slots=["A2"], credits=3))
    assert len(timetable) == 3
    assert len(timetable.ids_named("OS")) == 2
    assert timetable.existing_slots() == {"A1", "TG1", "D1", "A2"}
    assert timetable.get(second).slots == ["A2"]


def test_replace_keeps_position_and_allows_rename(timetable):
    algo_id = timetable.ids_named("Algorithms")[0]
    assert timetable.replace(algo_id, CourseRecord(name="Algo II", slots=["B1"], credits=2)) == algo_id
    assert [c.name for c in timetable.courses] == ["Algo II", "OS"]
    assert timetable.ids_named("Algorithms") == []


def test_rename_onto_existing_name_keeps_other_course(timetable, os_id):
    db_id = timetable.add(CourseRecord(name="DB", slots=["C1"], credits=4))
    timetable.replace(db_id, CourseRecord(name="OS", slots=["C1"], credits=4))

    assert len(timetable) == 3
    assert timetable.get(os_id).slots == ["D1"]
    assert timetable.existing_slots() == {"A1", "TG1", "D1", "C1"}


def test_replace_unknown_id_adds(timetable):
    new_id = timetable.replace("course-999", CourseRecord(name="New", slots=["B2"], credits=3))
    assert new_id != "course-999"
    assert timetable.get(new_id).name == "New"


def test_remove(timetable, os_id):
    assert timetable.remove(os_id) is True
    assert timetable.remove(os_id) is False
    assert len(timetable) == 1


def test_clashes(timetable):
    assert timetable.clashes() == {}
    timetable.add(CourseRecord(name="Other", slots=["A1"], credits=3))
    assert timetable.clashes() == {"A1": ["Algorithms", "Other"]}


def test_as_dataframe(timetable):
    df = timetable.as_dataframe()
    assert list(df.columns) == TABLE_COLUMNS
    assert df.loc[0, "slots"] == "A1+TG1"
    assert df.loc[1, "lab"] == "Dr.X: L1+L2"
    assert df.loc[0, "lab"] == ""


def test_empty_dataframe_has_columns():
    assert list(Timetable().as_dataframe().columns) == TABLE_COLUMNS


def test_record_rejects_bad_credits():
    with pytest.raises(ValueError):
        CourseRecord(name="X", slots=["A1"], credits=9)


def test_host_edit_flow_through_controller(timetable, os_id):
    draft = CourseDraftController(on_submit=lambda r: timetable.replace(os_id, r))
    draft.open(
        existing_slots=timetable.existing_slots(excluding=os_id),
        edit_context=timetable.edit_context_for(os_id),
    )
    assert not draft.is_taken("D1")
    assert draft.is_taken("A1")
    draft.toggle_slot("A1")
    draft.toggle_slot("E1")
    draft.set_credits(5)
    draft.submit_without_faculty()

    updated = timetable.get(os_id)
    assert updated.slots == ["D1", "E1"]
    assert updated.credits == 5
    assert updated.faculty_preferences == ["Dr.X"]
    assert timetable.clashes() == {}


def test_host_new_course_with_existing_name(timetable):
    draft = CourseDraftController(on_submit=timetable.add)
    draft.open(existing_slots=timetable.existing_slots())
    draft.set_name("OS")
    draft.set_slot_text("A2")
    draft.submit_without_faculty()

    assert len(timetable.ids_named("OS")) == 2
    assert "D1" in timetable.existing_slots()

import pytest

from course_draft import CourseDraftController
from models import EditContext


@pytest.fixture
def emitted():
    return []


@pytest.fixture
def requests():
    return []


@pytest.fixture
def draft(emitted, requests):
    return CourseDraftController(on_submit=emitted.append, on_request_faculty=requests.append)


@pytest.fixture
def db_edit():
    return EditContext(name="DB", slots=["C1"], credits=4)

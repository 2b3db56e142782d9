from datetime import datetime, timedelta, timezone

import pytest

from app.core.exceptions import RecordNotFoundError, StoreValidationError
from app.schemas.assignment import SubmissionCreate
from app.schemas.course import CourseCreate
from app.schemas.student import StudentCreate
from app.services.store.base import ASCENDING, DESCENDING
from app.services.store.memory import MemoryStore
from app.services.store.sql import SQLStore


@pytest.fixture(params=["memory", "sqlite"])
def any_store(request):
    if request.param == "memory":
        yield MemoryStore()
    else:
        store = SQLStore.from_url("sqlite:///:memory:", create_tables=True)
        yield store
        store.close()


def make_course(store, code="AWD101", name="Advanced Web Development"):
    return store.courses.insert(CourseCreate(course_name=name, course_code=code).model_dump())


def make_student(store, student_id="STU2024001", email="alex@brillx.com", clerk="user_123", courses=()):
    return store.students.insert(StudentCreate(
        student_id=student_id,
        name="Alex Johnson",
        email=email,
        clerk_user_id=clerk,
        enrolled_courses=list(courses),
    ).model_dump())


def test_insert_generates_identity(any_store):
    course = make_course(any_store)

    assert isinstance(course["id"], str) and len(course["id"]) == 32
    assert any_store.courses.find_by_id(course["id"])["course_code"] == "AWD101"


def test_find_by_unknown_id(any_store):
    assert any_store.courses.find_by_id("0" * 32) is None


def test_duplicate_course_code_rejected(any_store):
    make_course(any_store)
    with pytest.raises(StoreValidationError):
        make_course(any_store, name="Another name")


@pytest.mark.parametrize("overrides", [
    {"student_id": "STU2024001"},
    {"email": "alex@brillx.com"},
    {"clerk": "user_123"},
])
def test_duplicate_student_keys_rejected(any_store, overrides):
    make_student(any_store)
    fields = {"student_id": "STU2024002", "email": "other@brillx.com", "clerk": "user_999", **overrides}
    with pytest.raises(StoreValidationError):
        make_student(any_store, **fields)


def test_find_one_and_find_many_filter_on_fields(any_store):
    make_course(any_store, "AWD101")
    make_course(any_store, "DSF201", "Data Science Fundamentals")

    assert any_store.courses.find_one({"course_code": "DSF201"})["course_name"] == "Data Science Fundamentals"
    assert any_store.courses.find_one({"course_code": "NOPE"}) is None
    assert [c["course_code"] for c in any_store.courses.find_many()] == ["AWD101", "DSF201"]


def test_find_many_sort(any_store):
    course = make_course(any_store)
    student = make_student(any_store)
    start = datetime(2024, 1, 1, tzinfo=timezone.utc)
    for day, name in ((2, "second"), (1, "first"), (3, "third")):
        any_store.submissions.insert(SubmissionCreate(
            student_id=student["id"],
            course_id=course["id"],
            assignment_name=name,
            submitted_at=start + timedelta(days=day),
        ).model_dump())

    newest = any_store.submissions.find_many({"status": "submitted"}, sort=[("submitted_at", DESCENDING)])
    oldest = any_store.submissions.find_many(sort=[("submitted_at", ASCENDING)])

    assert [s["assignment_name"] for s in newest] == ["third", "second", "first"]
    assert [s["assignment_name"] for s in oldest] == ["first", "second", "third"]


def test_find_many_keeps_insertion_order_on_equal_timestamps(any_store):
    same_time = datetime(2024, 3, 1, 9, 0, tzinfo=timezone.utc)
    codes = ["ML301", "AWD101", "DSF201", "CS050"]
    for code in codes:
        any_store.courses.insert(CourseCreate(
            course_name=f"Course {code}", course_code=code, created_at=same_time,
        ).model_dump())

    assert [c["course_code"] for c in any_store.courses.find_many()] == codes


def test_sort_ties_fall_back_to_insertion_order(any_store):
    course = make_course(any_store)
    student = make_student(any_store)
    same_time = datetime(2024, 3, 1, 9, 0, tzinfo=timezone.utc)
    names = ["zeta", "alpha", "mid", "beta"]
    for name in names:
        any_store.submissions.insert(SubmissionCreate(
            student_id=student["id"],
            course_id=course["id"],
            assignment_name=name,
            submitted_at=same_time,
        ).model_dump())

    newest = any_store.submissions.find_many(sort=[("submitted_at", DESCENDING)])

    assert [s["assignment_name"] for s in newest] == names
    assert all("seq" not in s for s in newest)


def test_update_by_id(any_store):
    course = make_course(any_store)
    student = make_student(any_store)
    submission = any_store.submissions.insert(SubmissionCreate(
        student_id=student["id"], course_id=course["id"], assignment_name="Essay",
    ).model_dump())

    updated = any_store.submissions.update_by_id(
        submission["id"], {"status": "graded", "marks_obtained": 88, "feedback": "Good"}
    )

    assert updated["id"] == submission["id"]
    assert updated["status"] == "graded"
    assert updated["marks_obtained"] == 88
    assert updated["total_marks"] == 100
    assert any_store.submissions.find_by_id(submission["id"])["feedback"] == "Good"


def test_update_unknown_id_raises(any_store):
    with pytest.raises(RecordNotFoundError) as excinfo:
        any_store.submissions.update_by_id("f" * 32, {"status": "graded"})
    assert excinfo.value.message == "Assignment not found"
    assert excinfo.value.status_code == 404


def test_populate_list_reference_keeps_order(any_store):
    web = make_course(any_store, "AWD101")
    data = make_course(any_store, "DSF201", "Data Science Fundamentals")
    make_student(any_store, courses=[data["id"], web["id"], "missing"])

    students = any_store.populate(any_store.students.find_many(), "enrolled_courses", any_store.courses)

    assert [c["course_code"] for c in students[0]["enrolled_courses"]] == ["DSF201", "AWD101"]


def test_populate_scalar_reference(any_store):
    course = make_course(any_store)
    student = make_student(any_store)
    submission = any_store.submissions.insert(SubmissionCreate(
        student_id=student["id"], course_id=course["id"], assignment_name="Essay",
    ).model_dump())

    expanded = any_store.populate_one(submission, "course_id", any_store.courses)
    dangling = any_store.populate_one({**submission, "course_id": "gone"}, "course_id", any_store.courses)

    assert expanded["course_id"]["course_code"] == "AWD101"
    assert submission["course_id"] == course["id"]
    assert dangling["course_id"] is None


def test_memory_store_returns_copies():
    store = MemoryStore()
    course = make_course(store)
    course["course_name"] = "changed"

    assert store.courses.find_by_id(course["id"])["course_name"] == "Advanced Web Development"

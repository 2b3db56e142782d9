# tests/conftest.py

import pytest
from fastapi.testclient import TestClient

from app.main import create_app
from app.schemas.assignment import SubmissionCreate, SubmissionStatus
from app.schemas.course import CourseCreate
from app.schemas.student import StudentCreate
from app.schemas.test_marks import TestMarksCreate
from app.services.analytics.metrics import FixedMetricSource
from app.services.store.memory import MemoryStore


@pytest.fixture
def store():
    return MemoryStore()


@pytest.fixture
def metrics():
    return FixedMetricSource(progress=85, study_hours=42)


@pytest.fixture
def frontend_dir(tmp_path):
    (tmp_path / "dashboard.html").write_text("<h1>Dashboard</h1>")
    (tmp_path / "grading.html").write_text("<h1>Grading</h1>")
    return tmp_path


@pytest.fixture
def client(store, metrics, frontend_dir):
    app = create_app(store=store, metrics=metrics, frontend_dir=str(frontend_dir))
    return TestClient(app)


@pytest.fixture
def web_course(store):
    return store.courses.insert(CourseCreate(
        course_name="Advanced Web Development",
        course_code="AWD101",
        instructor="Dr. Sarah Johnson",
    ).model_dump())


@pytest.fixture
def data_course(store):
    return store.courses.insert(CourseCreate(
        course_name="Data Science Fundamentals",
        course_code="DSF201",
        instructor="Prof. Mike Chen",
    ).model_dump())


@pytest.fixture
def student(store, web_course, data_course):
    return store.students.insert(StudentCreate(
        student_id="STU2024001",
        name="Alex Johnson",
        email="alex.johnson@brillx.com",
        clerk_user_id="user_123",
        enrolled_courses=[web_course["id"], data_course["id"]],
    ).model_dump())


@pytest.fixture
def add_test(store):
    def _add(student, course, marks, name="Quiz", total=100):
        return store.test_marks.insert(TestMarksCreate(
            student_id=student["id"],
            course_id=course["id"],
            test_name=name,
            marks_obtained=marks,
            total_marks=total,
            percentage=marks / total * 100,
        ).model_dump())
    return _add


@pytest.fixture
def add_submission(store):
    def _add(student, course, name="Essay", marks=None):
        grade = {} if marks is None else {"status": SubmissionStatus.GRADED, "marks_obtained": marks}
        return store.submissions.insert(SubmissionCreate(
            student_id=student["id"],
            course_id=course["id"],
            assignment_name=name,
            original_file_name=f"{name.lower()}.pdf",
            **grade,
        ).model_dump())
    return _add

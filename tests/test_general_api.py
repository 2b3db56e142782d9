from datetime import datetime

import pytest
from fastapi.testclient import TestClient

from app.core import exceptions
from app.core.config import settings
from app.core.exceptions import StoreValidationError
from app.main import create_app
from app.services.store.sql import SQLStore


def test_health(client):
    response = client.get("/api/health")

    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    assert body["message"] == "Server is running"
    assert datetime.fromisoformat(body["timestamp"])


def test_list_courses(client, web_course, data_course):
    response = client.get("/api/courses")

    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    assert [c["course_code"] for c in body["courses"]] == ["AWD101", "DSF201"]


def test_list_students_expands_courses(client, student):
    response = client.get("/api/students")

    assert response.status_code == 200
    students = response.json()["students"]
    assert students[0]["student_id"] == "STU2024001"
    assert [c["course_name"] for c in students[0]["enrolled_courses"]] == [
        "Advanced Web Development",
        "Data Science Fundamentals",
    ]


def test_unknown_route(client):
    response = client.get("/api/nothing-here")

    assert response.status_code == 404
    assert response.json()["success"] is False


def test_unexpected_error_becomes_500(store, metrics, monkeypatch):
    def broken(*args, **kwargs):
        raise RuntimeError("connection reset by store")

    monkeypatch.setattr(store.courses, "find_many", broken)
    client = TestClient(create_app(store=store, metrics=metrics), raise_server_exceptions=False)

    response = client.get("/api/courses")

    assert response.status_code == 500
    assert response.json() == {"success": False, "message": "connection reset by store"}


def test_store_validation_error_becomes_500(client, store, web_course, monkeypatch):
    def duplicate(record):
        raise StoreValidationError("Duplicate test marks")

    monkeypatch.setattr(store.test_marks, "insert", duplicate)
    store.students.insert({
        "student_id": "STU2024009", "name": "Sam", "email": "sam@brillx.com",
        "clerk_user_id": "user_9", "enrolled_courses": [],
    })

    response = client.post("/api/tests/add-marks", json={
        "student_id": "STU2024009",
        "course_id": web_course["id"],
        "test_name": "Quiz",
        "marks_obtained": 5,
        "total_marks": 10,
    })

    assert response.status_code == 500
    assert response.json() == {"success": False, "message": "Duplicate test marks"}


@pytest.mark.parametrize("path, heading", [
    ("/", "Dashboard"),
    ("/dashboard.html", "Dashboard"),
    ("/grading.html", "Grading"),
])
def test_static_pages(client, path, heading):
    response = client.get(path)

    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/html")
    assert heading in response.text


def test_missing_static_page(client):
    response = client.get("/test.html")

    assert response.status_code == 404
    assert response.json() == {"success": False, "message": "Page test.html not found"}


def test_lifespan_builds_and_disposes_sql_store(metrics, monkeypatch):
    monkeypatch.setattr(settings, "DATABASE_URL", "sqlite://")
    monkeypatch.setattr(settings, "AUTO_CREATE_TABLES", True)
    app = create_app(metrics=metrics)
    assert app.state.store is None

    with TestClient(app) as client:
        assert isinstance(app.state.store, SQLStore)
        response = client.get("/api/courses")
        assert response.status_code == 200
        assert response.json() == {"success": True, "courses": []}

    assert app.state.store is None


def test_cors_allows_any_origin_without_credentials(client):
    response = client.get("/api/health", headers={"Origin": "https://dashboard.example.com"})

    assert response.status_code == 200
    assert response.headers["access-control-allow-origin"] == "*"
    assert "access-control-allow-credentials" not in response.headers


def test_api_error_classes():
    api_errors = {
        name for name, obj in vars(exceptions).items()
        if isinstance(obj, type) and issubclass(obj, exceptions.BaseAPIException)
    }

    assert api_errors == {
        "BaseAPIException", "NotFoundException", "RecordNotFoundError", "StoreValidationError",
    }
    assert issubclass(exceptions.RecordNotFoundError, exceptions.NotFoundException)

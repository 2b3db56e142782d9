from fastapi import Request

from app.core.exceptions import NotFoundException
from app.services.analytics.metrics import MetricSource
from app.services.store.base import Record, Store


def get_store(request: Request) -> Store:
    """
    Dependency returning the store handle attached to the application.
    Tests swap it for an in-memory store through create_app(store=...).
    """
    return request.app.state.store


def get_metrics(request: Request) -> MetricSource:
    return request.app.state.metrics


def get_student_or_404(store: Store, student_id: str) -> Record:
    """Look a student up by the natural ``student_id`` key."""
    student = store.students.find_one({"student_id": student_id})
    if not student:
        raise NotFoundException("Student not found")
    return student

import logging

from fastapi import APIRouter, Depends

from app.api.deps import get_metrics, get_store, get_student_or_404
from app.services.analytics.metrics import MetricSource
from app.services.analytics.reports import build_dashboard
from app.services.store.base import Store

logger = logging.getLogger(__name__)
router = APIRouter()


@router.get("/{student_id}")
def get_dashboard(
    student_id: str,
    store: Store = Depends(get_store),
    metrics: MetricSource = Depends(get_metrics),
):
    """
    Dashboard summary for one student: overall grade, course progress,
    the three most recent assignments and tests.
    """
    student = get_student_or_404(store, student_id)
    student = store.populate_one(student, "enrolled_courses", store.courses)

    assignments = store.populate(
        store.submissions.find_many({"student_id": student["id"]}), "course_id", store.courses
    )
    tests = store.populate(
        store.test_marks.find_many({"student_id": student["id"]}), "course_id", store.courses
    )

    logger.info(f"Building dashboard for {student_id}")
    return {"success": True, "data": build_dashboard(student, assignments, tests, metrics)}

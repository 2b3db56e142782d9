import logging

from fastapi import APIRouter, Depends

from app.api.deps import get_metrics, get_store, get_student_or_404
from app.services.analytics.metrics import MetricSource
from app.services.analytics.reports import build_report
from app.services.store.base import Store

logger = logging.getLogger(__name__)
router = APIRouter()


@router.get("/students")
def get_students(store: Store = Depends(get_store)):
    """
    List every student with enrolled courses expanded.
    """
    students = store.populate(store.students.find_many(), "enrolled_courses", store.courses)
    return {"success": True, "students": students}


@router.get("/student/{student_id}")
def get_student_report(
    student_id: str,
    store: Store = Depends(get_store),
    metrics: MetricSource = Depends(get_metrics),
):
    """
    Full report for one student: every assignment and test with
    grade distribution, per-course performance and improvement areas.
    """
    student = get_student_or_404(store, student_id)
    student = store.populate_one(student, "enrolled_courses", store.courses)

    assignments = store.populate(
        store.submissions.find_many({"student_id": student["id"]}), "course_id", store.courses
    )
    tests = store.populate(
        store.test_marks.find_many({"student_id": student["id"]}), "course_id", store.courses
    )

    logger.info(f"Building report for {student_id}: {len(assignments)} assignments, {len(tests)} tests")
    return {"success": True, "data": build_report(student, assignments, tests, metrics)}

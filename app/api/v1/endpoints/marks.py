import logging

from fastapi import APIRouter, Depends

from app.api.deps import get_store, get_student_or_404
from app.core.exceptions import NotFoundException
from app.schemas.test_marks import AddTestMarksRequest, TestMarksCreate
from app.services.store.base import Store

logger = logging.getLogger(__name__)
router = APIRouter()


@router.get("/student/{student_id}")
def get_student_tests(student_id: str, store: Store = Depends(get_store)):
    """
    Test results of one student, with the course expanded.
    """
    student = get_student_or_404(store, student_id)
    results = store.populate(
        store.test_marks.find_many({"student_id": student["id"]}), "course_id", store.courses
    )
    return {"success": True, "results": results}


@router.post("/add-marks")
def add_test_marks(body: AddTestMarksRequest, store: Store = Depends(get_store)):
    """
    Record a test result. The percentage is computed once, here.

    - **student_id**: the student's natural key (e.g. STU2024001)
    - **course_id**: course identity
    """
    student = store.students.find_one({"student_id": body.student_id})
    course = store.courses.find_by_id(body.course_id)
    if not student or not course:
        raise NotFoundException("Student or course not found")

    test_marks = store.test_marks.insert(
        TestMarksCreate.from_request(body, student_ref=student["id"]).model_dump()
    )
    logger.info(f"Recorded {body.test_name} for {body.student_id}: {test_marks['percentage']:.1f}%")

    return {"success": True, "message": "Test marks added successfully", "testMarks": test_marks}

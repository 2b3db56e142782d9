import logging

from fastapi import APIRouter, Depends

from app.api.deps import get_store
from app.core.exceptions import NotFoundException
from app.schemas.assignment import (
    GradeAssignmentRequest, SubmissionCreate, SubmissionStatus, SubmitAssignmentRequest,
)
from app.services.store.base import DESCENDING, Record, Store

logger = logging.getLogger(__name__)
router = APIRouter()


def expand_submissions(store: Store, submissions: list) -> list:
    submissions = store.populate(submissions, "student_id", store.students)
    return store.populate(submissions, "course_id", store.courses)


@router.get("/submissions")
def get_submissions(store: Store = Depends(get_store)):
    """
    Every submission, with student and course expanded.
    """
    return {"success": True, "files": expand_submissions(store, store.submissions.find_many())}


@router.post("/submit")
def submit_assignment(body: SubmitAssignmentRequest, store: Store = Depends(get_store)):
    """
    Register a submission. Only the file name is kept, never the file.
    """
    student = store.students.find_one({"student_id": body.student_id})
    course = store.courses.find_by_id(body.course_id)
    if not student or not course:
        raise NotFoundException("Student or course not found")

    submission = SubmissionCreate(
        student_id=student["id"],
        course_id=course["id"],
        assignment_name=body.assignment_name,
        original_file_name=body.file_name,
    )
    assignment = store.submissions.insert(submission.model_dump())
    logger.info(f"Assignment '{body.assignment_name}' submitted by {body.student_id}")

    return {"success": True, "message": "Assignment submitted successfully", "assignment": assignment}


@router.post("/grade")
def grade_assignment(body: GradeAssignmentRequest, store: Store = Depends(get_store)):
    """
    Grade a submission. Grading again overwrites the previous grade.
    """
    # Raises RecordNotFoundError -> 404 "Assignment not found"
    assignment: Record = store.submissions.update_by_id(body.assignment_id, body.to_update())
    logger.info(f"Assignment {body.assignment_id} graded: {body.marks_obtained}")

    return {
        "success": True,
        "message": "Assignment graded successfully",
        "assignment": expand_submissions(store, [assignment])[0],
    }


@router.get("/for-grading")
def get_assignments_for_grading(store: Store = Depends(get_store)):
    """
    Submissions still waiting for a grade, newest first.
    """
    pending = store.submissions.find_many(
        {"status": SubmissionStatus.SUBMITTED.value},
        sort=[("submitted_at", DESCENDING)],
    )
    return {"success": True, "assignments": expand_submissions(store, pending)}

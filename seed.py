import logging

from app.core.config import settings
from app.schemas.assignment import SubmissionCreate, SubmissionStatus
from app.schemas.course import CourseCreate
from app.schemas.student import StudentCreate
from app.schemas.test_marks import TestMarksCreate
from app.services.store.base import Store

# Setup logging to see output
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

COURSES = [
    CourseCreate(
        course_name="Advanced Web Development",
        course_code="AWD101",
        instructor="Dr. Sarah Johnson",
        duration="12 weeks",
        batch="Batch A - 2024",
    ),
    CourseCreate(
        course_name="Data Science Fundamentals",
        course_code="DSF201",
        instructor="Prof. Mike Chen",
        duration="10 weeks",
        batch="Batch B - 2024",
    ),
    CourseCreate(
        course_name="Machine Learning",
        course_code="ML301",
        instructor="Dr. Emily Watson",
        duration="14 weeks",
        batch="Batch C - 2024",
    ),
]


def seed_data(store: Store) -> bool:
    """
    Seed sample courses, students, test results and submissions.
    Returns False when the store already holds students.
    """
    if store.students.find_one({}):
        logger.info("Store already contains data. Skipping seed.")
        return False

    logger.info("Seeding data...")

    courses = [store.courses.insert(course.model_dump()) for course in COURSES]
    awd, dsf, ml = (course["id"] for course in courses)

    alex = store.students.insert(StudentCreate(
        student_id="STU2024001",
        name="Alex Johnson",
        email="alex.johnson@brillx.com",
        contact="+1234567890",
        clerk_user_id="user_123",
        enrolled_courses=[awd, dsf],
    ).model_dump())
    sarah = store.students.insert(StudentCreate(
        student_id="STU2024002",
        name="Sarah Wilson",
        email="sarah.wilson@brillx.com",
        contact="+1234567891",
        clerk_user_id="user_124",
        enrolled_courses=[dsf, ml],
    ).model_dump())

    # Back-references on the courses
    store.courses.update_by_id(awd, {"students_enrolled": [alex["id"]]})
    store.courses.update_by_id(dsf, {"students_enrolled": [alex["id"], sarah["id"]]})
    store.courses.update_by_id(ml, {"students_enrolled": [sarah["id"]]})

    for course_id, test_name, marks in ((awd, "Mid-term Assessment", 85), (dsf, "Data Analysis Test", 72)):
        store.test_marks.insert(TestMarksCreate(
            student_id=alex["id"],
            course_id=course_id,
            test_name=test_name,
            marks_obtained=marks,
            total_marks=100,
            percentage=marks,
        ).model_dump())

    store.submissions.insert(SubmissionCreate(
        student_id=alex["id"],
        course_id=awd,
        assignment_name="React Component Library",
        original_file_name="react-assignment.pdf",
        status=SubmissionStatus.GRADED,
        marks_obtained=92,
        total_marks=100,
        feedback="Excellent work! Great component structure.",
        graded_by="Dr. Sarah Johnson",
    ).model_dump())
    store.submissions.insert(SubmissionCreate(
        student_id=alex["id"],
        course_id=awd,
        assignment_name="Node.js API Development",
        original_file_name="node-api.zip",
    ).model_dump())

    logger.info(f"Data seeded: {len(courses)} courses, 2 students")
    return True


if __name__ == "__main__":
    from app.services.store.sql import SQLStore

    store = SQLStore.from_url(settings.DATABASE_URL, create_tables=True)
    try:
        seed_data(store)
    finally:
        store.close()

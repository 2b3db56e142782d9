from .student import Student
from .course import Course
from .test_marks import TestMarks
from .assignment_submission import AssignmentSubmission

__all__ = [
    "Student",
    "Course",
    "TestMarks",
    "AssignmentSubmission",
]

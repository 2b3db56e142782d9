"""
Grade arithmetic behind the dashboard and report views.

Everything here is a pure function over store records. Scores are the raw
``marks_obtained`` values of graded submissions and test results; course
references may be plain ids or expanded course records.
"""
import math
from typing import Any, Dict, Iterable, List, Optional, Sequence, Tuple

from app.schemas.assignment import SubmissionStatus

Record = Dict[str, Any]

#: Lower bounds of the A, B, C and D buckets; anything below the last is F
GRADE_THRESHOLDS = (90, 80, 70, 60)
GRADE_LABELS = ("A", "B", "C", "D", "F")

LOW_ASSIGNMENT_SCORE = 70

GENERIC_IMPROVEMENT_AREAS = (
    {"topic": "Advanced problem solving", "priority": "medium", "course": "All Courses"},
    {"topic": "Time management in tests", "priority": "low", "course": "All Courses"},
)


def average(values: Iterable[float]) -> float:
    """Arithmetic mean; an empty input averages to 0."""
    values = list(values)
    if not values:
        return 0
    return sum(values) / len(values)


def round_half_up(value: float) -> int:
    # round() would send 72.5 to 72
    return int(math.floor(value + 0.5))


def ref_id(ref: Any) -> Optional[str]:
    if isinstance(ref, dict):
        return ref.get("id")
    return ref


def course_name(record: Record, default: str = "Unknown") -> str:
    course = record.get("course_id")
    if isinstance(course, dict) and course.get("course_name"):
        return course["course_name"]
    return default


def graded(assignments: Iterable[Record]) -> List[Record]:
    return [a for a in assignments if a.get("status") == SubmissionStatus.GRADED.value]


def pending(assignments: Iterable[Record]) -> List[Record]:
    return [a for a in assignments if a.get("status") == SubmissionStatus.SUBMITTED.value]


def scores(records: Iterable[Record]) -> List[float]:
    return [r["marks_obtained"] for r in records]


def all_scores(assignments: Sequence[Record], tests: Sequence[Record]) -> List[float]:
    """Graded assignment scores followed by test scores."""
    return scores(graded(assignments)) + scores(tests)


def dashboard_overall_grade(assignments: Sequence[Record], tests: Sequence[Record]) -> int:
    """Every score counts once, whichever category it comes from."""
    values = all_scores(assignments, tests)
    if not values:
        return 0
    return round_half_up(average(values))


def report_overall_grade(assignment_average: float, test_average: float) -> int:
    """Assignments and tests weigh the same regardless of how many of each there are."""
    if assignment_average + test_average > 0:
        return round_half_up((assignment_average + test_average) / 2)
    return 0


def letter_grade(score: float) -> str:
    for threshold, label in zip(GRADE_THRESHOLDS, GRADE_LABELS):
        if score >= threshold:
            return label
    return GRADE_LABELS[-1]


def grade_distribution(values: Iterable[float]) -> List[int]:
    """Counts per letter grade, always ordered [A, B, C, D, F]."""
    counts = [0] * len(GRADE_LABELS)
    for score in values:
        counts[GRADE_LABELS.index(letter_grade(score))] += 1
    return counts


def course_performance(
    courses: Sequence[Record],
    assignments: Sequence[Record],
    tests: Sequence[Record],
) -> Dict[str, int]:
    """Rounded mean score per enrolled course name; 0 for courses without scores."""
    performance = {}
    for course in courses:
        course_assignments = [a for a in graded(assignments) if ref_id(a.get("course_id")) == course["id"]]
        course_tests = [t for t in tests if ref_id(t.get("course_id")) == course["id"]]
        values = scores(course_assignments) + scores(course_tests)
        performance[course["course_name"]] = round_half_up(average(values)) if values else 0
    return performance


def improvement_areas(assignments: Sequence[Record], tests: Sequence[Record]) -> List[Dict[str, str]]:
    areas = []

    if tests:
        lowest = tests[0]
        for test in tests[1:]:
            if test["marks_obtained"] < lowest["marks_obtained"]:
                lowest = test
        areas.append({
            "topic": f"Review {lowest['test_name']} concepts",
            "priority": "high",
            "course": course_name(lowest, default="General"),
        })

    if any(a["marks_obtained"] < LOW_ASSIGNMENT_SCORE for a in graded(assignments)):
        areas.append({
            "topic": "Improve assignment submission quality",
            "priority": "medium",
            "course": "All Courses",
        })

    if not areas:
        areas = [dict(area) for area in GENERIC_IMPROVEMENT_AREAS]

    return areas


def course_status_counts(courses: Iterable[Record]) -> Tuple[int, int]:
    """
    (completed, active) from each course's ``progress``. A course without
    a progress value counts as neither.
    """
    completed = active = 0
    for course in courses:
        progress = course.get("progress")
        if progress is None:
            continue
        if progress == 100:
            completed += 1
        elif progress < 100:
            active += 1
    return completed, active


def completion_rate(assignments: Sequence[Record]) -> int:
    return round_half_up(len(graded(assignments)) / max(len(assignments), 1) * 100)

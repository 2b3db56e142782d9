"""
Dashboard and report payloads.

Both builders expect the student with ``enrolled_courses`` expanded and
the assignment/test lists with ``course_id`` expanded.
"""
from typing import Any, Dict, List, Sequence

from app.services.analytics import grades
from app.services.analytics.metrics import MetricSource

Record = Dict[str, Any]

RECENT_ITEMS = 3


def build_dashboard(
    student: Record,
    assignments: Sequence[Record],
    tests: Sequence[Record],
    metrics: MetricSource,
) -> Dict[str, Any]:
    courses = student.get("enrolled_courses") or []
    graded = grades.graded(assignments)
    pending = grades.pending(assignments)
    overall_grade = grades.dashboard_overall_grade(assignments, tests)

    # Progress is simulated per request
    courses_with_progress = [{**course, "progress": metrics.course_progress()} for course in courses]
    completed, active = grades.course_status_counts(courses_with_progress)

    return {
        "student": {
            "name": student["name"],
            "id": student["student_id"],
            "email": student["email"],
            "completedCourses": completed,
            "activeCourses": active,
            "overallGrade": overall_grade,
            "assignmentsCompleted": len(graded),
            "assignmentsPending": len(pending),
            "testsTaken": len(tests),
            "studyHours": metrics.study_hours(),
        },
        "courses": courses_with_progress,
        "recentAssignments": [
            {
                "name": a["assignment_name"],
                "course": grades.course_name(a),
                "status": a["status"],
                "score": a["marks_obtained"],
                "submitted": a["submitted_at"],
            }
            for a in assignments[:RECENT_ITEMS]
        ],
        "recentTests": [
            {
                "name": t["test_name"],
                "course": grades.course_name(t),
                "score": t["marks_obtained"],
                "date": t["test_date"],
            }
            for t in tests[:RECENT_ITEMS]
        ],
        "stats": {
            "totalCourses": len(courses),
            "averageScore": overall_grade,
            "completionRate": grades.completion_rate(assignments),
        },
    }


def build_report(
    student: Record,
    assignments: Sequence[Record],
    tests: Sequence[Record],
    metrics: MetricSource,
) -> Dict[str, Any]:
    courses: List[Record] = student.get("enrolled_courses") or []
    graded = grades.graded(assignments)

    assignment_average = grades.average(grades.scores(graded))
    test_average = grades.average(grades.scores(tests))

    # Stored courses carry no progress, so both counts stay at 0 here
    completed, active = grades.course_status_counts(courses)

    return {
        "student": {
            "name": student["name"],
            "id": student["student_id"],
            "email": student["email"],
            "completedCourses": completed,
            "activeCourses": active,
            "overallGrade": grades.report_overall_grade(assignment_average, test_average),
            "assignmentsCompleted": len(graded),
            "testsTaken": len(tests),
            "studyHours": metrics.study_hours(),
        },
        "courses": courses,
        "assignments": [
            {
                "id": a["id"],
                "title": a["assignment_name"],
                "course": grades.course_name(a),
                "submittedDate": a["submitted_at"],
                "score": a["marks_obtained"],
                "status": a["status"],
                "maxScore": a["total_marks"],
                "feedback": a.get("feedback"),
            }
            for a in assignments
        ],
        "tests": [
            {
                "id": t["id"],
                "title": t["test_name"],
                "course": grades.course_name(t),
                "dateTaken": t["test_date"],
                "score": t["marks_obtained"],
                "maxScore": t["total_marks"],
                "percentage": t.get("percentage"),
            }
            for t in tests
        ],
        "analytics": {
            "gradeDistribution": grades.grade_distribution(grades.all_scores(assignments, tests)),
            "subjectPerformance": grades.course_performance(courses, assignments, tests),
            "assignmentAverage": grades.round_half_up(assignment_average),
            "testAverage": grades.round_half_up(test_average),
            "improvementAreas": grades.improvement_areas(assignments, tests),
        },
    }

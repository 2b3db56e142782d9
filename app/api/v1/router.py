from fastapi import APIRouter
from app.api.v1.endpoints import assignments
from app.api.v1.endpoints import courses
from app.api.v1.endpoints import dashboard
from app.api.v1.endpoints import marks
from app.api.v1.endpoints import students
from app.api.v1.endpoints import system

api_router = APIRouter()

api_router.include_router(
    assignments.router,
    prefix="/assignments",
    tags=["assignments"]
)

api_router.include_router(
    marks.router,
    prefix="/tests",
    tags=["tests"]
)

api_router.include_router(
    dashboard.router,
    prefix="/dashboard",
    tags=["dashboard"]
)

api_router.include_router(
    courses.router,
    prefix="/courses",
    tags=["courses"]
)

# /students (list) and /student/{studentId} (report)
api_router.include_router(
    students.router,
    tags=["students"]
)

api_router.include_router(
    system.router,
    tags=["system"]
)

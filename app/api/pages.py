from pathlib import Path

from fastapi import APIRouter, Request
from fastapi.responses import FileResponse

from app.core.exceptions import NotFoundException

router = APIRouter()

PAGES = (
    "dashboard.html",
    "student_report.html",
    "grading.html",
    "assignments.html",
    "test.html",
)


def serve_page(request: Request, filename: str) -> FileResponse:
    path = Path(request.app.state.frontend_dir) / filename
    if not path.is_file():
        raise NotFoundException(f"Page {filename} not found")
    return FileResponse(path, media_type="text/html")


@router.get("/", include_in_schema=False)
def index(request: Request):
    return serve_page(request, "dashboard.html")


def _page_route(filename: str):
    def page(request: Request):
        return serve_page(request, filename)
    page.__name__ = filename.replace(".html", "_page")
    return page


for _filename in PAGES:
    router.add_api_route(f"/{_filename}", _page_route(_filename), methods=["GET"], include_in_schema=False)

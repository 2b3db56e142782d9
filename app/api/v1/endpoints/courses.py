from fastapi import APIRouter, Depends

from app.api.deps import get_store
from app.services.store.base import Store

router = APIRouter()


@router.get("")
def get_courses(store: Store = Depends(get_store)):
    """
    List every course.
    """
    return {"success": True, "courses": store.courses.find_many()}

from datetime import datetime
from typing import List, Optional
from pydantic import BaseModel, Field

from app.schemas.student import utcnow


class CourseBase(BaseModel):
    course_name: str
    course_code: str
    instructor: Optional[str] = None
    duration: Optional[str] = None
    description: Optional[str] = None
    batch: Optional[str] = None


class CourseCreate(CourseBase):
    students_enrolled: List[str] = Field(default_factory=list)
    created_at: datetime = Field(default_factory=utcnow)

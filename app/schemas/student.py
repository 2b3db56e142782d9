from datetime import datetime, timezone
from typing import List, Optional
from pydantic import BaseModel, EmailStr, Field


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class StudentBase(BaseModel):
    student_id: str
    name: str
    email: EmailStr
    contact: Optional[str] = None
    clerk_user_id: str


class StudentCreate(StudentBase):
    enrolled_courses: List[str] = Field(default_factory=list)
    created_at: datetime = Field(default_factory=utcnow)

from datetime import datetime
from enum import Enum
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field

from app.schemas.student import utcnow


class SubmissionStatus(str, Enum):
    SUBMITTED = "submitted"
    GRADED = "graded"


# Requests
class SubmitAssignmentRequest(BaseModel):
    """Body of POST /assignments/submit (camelCase keys, as the frontend sends them)."""
    model_config = ConfigDict(populate_by_name=True)

    student_id: str = Field(alias="studentId")
    course_id: str = Field(alias="courseId")
    assignment_name: str = Field(alias="assignmentName")
    file_name: Optional[str] = Field(default=None, alias="fileName")


class GradeAssignmentRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    assignment_id: str = Field(alias="assignmentId")
    marks_obtained: float = Field(ge=0)
    total_marks: Optional[float] = Field(default=None, gt=0)
    feedback: Optional[str] = None
    graded_by: Optional[str] = None

    def to_update(self) -> dict:
        """Fields written on grading; omitted optional fields keep their stored value."""
        fields = self.model_dump(
            include={"marks_obtained", "total_marks", "feedback", "graded_by"},
            exclude_none=True,
        )
        fields["status"] = SubmissionStatus.GRADED.value
        fields["graded_at"] = utcnow()
        return fields


# Stored record
class SubmissionCreate(BaseModel):
    model_config = ConfigDict(use_enum_values=True)

    student_id: str
    course_id: str
    assignment_name: str
    original_file_name: Optional[str] = None
    file_path: Optional[str] = None
    submitted_at: datetime = Field(default_factory=utcnow)
    status: SubmissionStatus = Field(default=SubmissionStatus.SUBMITTED, validate_default=True)
    marks_obtained: float = 0
    total_marks: float = 100
    feedback: Optional[str] = None
    graded_by: Optional[str] = None
    graded_at: Optional[datetime] = None

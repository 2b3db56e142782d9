from sqlalchemy import Column, Integer, String, Float, Text, DateTime, ForeignKey
from app.core.database import Base


class AssignmentSubmission(Base):
    __tablename__ = "assignment_submissions"

    seq = Column(Integer, primary_key=True, autoincrement=True)
    id = Column(String(32), unique=True, index=True, nullable=False)
    student_id = Column(String(32), ForeignKey("students.id"), index=True, nullable=False)
    course_id = Column(String(32), ForeignKey("courses.id"), index=True, nullable=False)
    assignment_name = Column(String, nullable=False)
    original_file_name = Column(String, nullable=True)
    file_path = Column(String, nullable=True)
    submitted_at = Column(DateTime(timezone=True), nullable=False, index=True)
    # submitted, graded
    status = Column(String, nullable=False, default="submitted", index=True)
    marks_obtained = Column(Float, nullable=False, default=0)
    total_marks = Column(Float, nullable=False, default=100)
    feedback = Column(Text, nullable=True)
    graded_by = Column(String, nullable=True)
    graded_at = Column(DateTime(timezone=True), nullable=True)

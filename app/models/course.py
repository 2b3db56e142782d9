from sqlalchemy import Column, Integer, String, Text, DateTime, JSON
from app.core.database import Base


class Course(Base):
    __tablename__ = "courses"

    seq = Column(Integer, primary_key=True, autoincrement=True)
    id = Column(String(32), unique=True, index=True, nullable=False)
    course_name = Column(String, nullable=False)
    course_code = Column(String, unique=True, index=True, nullable=False)
    instructor = Column(String, nullable=True)
    duration = Column(String, nullable=True)
    description = Column(Text, nullable=True)
    batch = Column(String, nullable=True)
    students_enrolled = Column(JSON, nullable=False, default=list)
    created_at = Column(DateTime(timezone=True), nullable=False)

from sqlalchemy import Column, Integer, String, DateTime, JSON
from app.core.database import Base


class Student(Base):
    __tablename__ = "students"

    # Insertion sequence; breaks ties between equal timestamps
    seq = Column(Integer, primary_key=True, autoincrement=True)
    id = Column(String(32), unique=True, index=True, nullable=False)
    student_id = Column(String, unique=True, index=True, nullable=False)
    name = Column(String, nullable=False)
    email = Column(String, unique=True, index=True, nullable=False)
    contact = Column(String, nullable=True)
    clerk_user_id = Column(String, unique=True, index=True, nullable=False)
    # Ordered list of course ids
    enrolled_courses = Column(JSON, nullable=False, default=list)
    created_at = Column(DateTime(timezone=True), nullable=False)

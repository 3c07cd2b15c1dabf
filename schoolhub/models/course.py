# schoolhub/models/course.py
import uuid
from sqlalchemy import Column, String, ForeignKey, DateTime, Uuid, UniqueConstraint, func, text
from sqlalchemy.orm import relationship

from schoolhub.db.base_class import Base


class Course(Base):
    __tablename__ = "courses"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    school_id = Column(Uuid, ForeignKey("schools.id", ondelete="CASCADE"), nullable=False, index=True)
    teacher_id = Column(Uuid, ForeignKey("users.id"), nullable=True, index=True)
    name = Column(String, nullable=False)
    class_number = Column(String, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    teacher = relationship("User")


class CourseEnrollment(Base):
    __tablename__ = "course_enrollments"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    school_id = Column(Uuid, ForeignKey("schools.id", ondelete="CASCADE"), nullable=False, index=True)
    course_id = Column(Uuid, ForeignKey("courses.id", ondelete="CASCADE"), nullable=False, index=True)
    student_id = Column(Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    status = Column(String, nullable=False, server_default=text("'active'"))  # active|dropped
    enrolled_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    __table_args__ = (
        UniqueConstraint("course_id", "student_id", name="uq_course_student"),
    )

    student = relationship("User")

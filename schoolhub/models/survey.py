# schoolhub/models/survey.py
import uuid
from sqlalchemy import (
    Column, Integer, String, Text, ForeignKey, DateTime, Uuid, JSON, UniqueConstraint, func, text
)
from sqlalchemy.orm import relationship

from schoolhub.db.base_class import Base


class Survey(Base):
    __tablename__ = "surveys"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    school_id = Column(Uuid, ForeignKey("schools.id", ondelete="CASCADE"), nullable=False, index=True)
    course_id = Column(Uuid, ForeignKey("courses.id", ondelete="CASCADE"), nullable=False, index=True)
    title = Column(String, nullable=False)
    status = Column(String, nullable=False, server_default=text("'active'"))  # draft|active|closed
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    course = relationship("Course")
    questions = relationship("SurveyQuestion", back_populates="survey", cascade="all, delete-orphan")


class SurveyQuestion(Base):
    __tablename__ = "survey_questions"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    survey_id = Column(Uuid, ForeignKey("surveys.id", ondelete="CASCADE"), nullable=False, index=True)
    question_text = Column(Text, nullable=False)
    question_type = Column(String, nullable=False)  # rating|multiple_choice|text
    options = Column(JSON)  # choices for multiple_choice, NULL otherwise
    order_index = Column(Integer, nullable=False, default=0)

    survey = relationship("Survey", back_populates="questions")


class SurveyResponse(Base):
    __tablename__ = "survey_responses"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    school_id = Column(Uuid, ForeignKey("schools.id", ondelete="CASCADE"), nullable=False, index=True)
    survey_id = Column(Uuid, ForeignKey("surveys.id", ondelete="CASCADE"), nullable=False, index=True)
    question_id = Column(Uuid, ForeignKey("survey_questions.id", ondelete="CASCADE"), nullable=False, index=True)
    student_id = Column(Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)

    # Always stored as text; ratings hold "1".."5"
    response_value = Column(Text, nullable=True)
    submitted_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    __table_args__ = (
        UniqueConstraint("survey_id", "question_id", "student_id", name="uq_response_once"),
    )

    question = relationship("SurveyQuestion")
    student = relationship("User")

"""Shared fixtures: in-memory SQLite database, seeded schools and a client."""
from __future__ import annotations

import os

# Settings are read at import time; point them at SQLite before anything loads
os.environ["DATABASE_URL"] = "sqlite+pysqlite:///:memory:"
os.environ["JWT_SECRET"] = "test-secret"
os.environ["PASSWORD_HASH_ROUNDS"] = "4"

import uuid
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import Dict, List

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from schoolhub.analytics.models import SurveyResponse
from schoolhub.core.security import create_access_token, hash_password
from schoolhub.db.base import Base
from schoolhub.db.session import get_db
from schoolhub.main import app
from schoolhub.models.course import Course, CourseEnrollment
from schoolhub.models.school import School
from schoolhub.models.survey import Survey, SurveyQuestion, SurveyResponse as SurveyResponseRow
from schoolhub.models.user import User

BASE_TIME = datetime(2024, 3, 1, 9, 0, 0)

PASSWORD = "correct horse battery"
PASSWORD_HASH = hash_password(PASSWORD)


@pytest.fixture
def make_response():
    """Factory for in-memory analytics rows."""

    def _make(student, value, qtype="rating", question="How clear was the lesson?",
              minutes=0, name=None, question_id=None):
        return SurveyResponse(
            student_id=student,
            question_id=question_id or uuid.uuid5(uuid.NAMESPACE_URL, question),
            question_text=question,
            question_type=qtype,
            response_value=value,
            submitted_at=BASE_TIME + timedelta(minutes=minutes),
            student_name=name,
        )

    return _make


@pytest.fixture
def engine():
    eng = create_engine(
        "sqlite+pysqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(eng)
    yield eng
    eng.dispose()


@pytest.fixture
def db(engine):
    session = sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)()
    yield session
    session.close()


@pytest.fixture
def client(engine):
    TestingSession = sessionmaker(bind=engine, autoflush=False)

    def _override():
        s = TestingSession()
        try:
            yield s
        finally:
            s.close()

    app.dependency_overrides[get_db] = _override
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


@dataclass
class World:
    school: School
    other_school: School
    admin: User
    teacher: User
    other_teacher: User
    foreign_teacher: User
    course: Course
    other_course: Course
    survey: Survey
    second_survey: Survey
    other_course_survey: Survey
    foreign_survey: Survey
    students: List[User] = field(default_factory=list)
    questions: Dict[str, SurveyQuestion] = field(default_factory=dict)

    def headers(self, user: User) -> dict:
        token = create_access_token({"sub": str(user.id)})
        return {"Authorization": f"Bearer {token}"}


def _user(db, school, email, role, name):
    u = User(school_id=school.id, email=email, role=role, full_name=name, status="active",
             password_hash=PASSWORD_HASH)
    db.add(u)
    return u


def _answer(db, survey, question, student, value, minutes):
    db.add(SurveyResponseRow(
        school_id=survey.school_id, survey_id=survey.id, question_id=question.id,
        student_id=student.id, response_value=value,
        submitted_at=BASE_TIME + timedelta(minutes=minutes),
    ))


@pytest.fixture
def world(db) -> World:
    """Two schools. In the first one:

    - Ana: ratings 5 and 4 plus a text answer -> 4.5 excelling
    - Ben: rating 3 -> 3.0 struggling
    - Cleo: only a text answer -> no_data
    - Dev: enrolled, never answered
    The second school has its own teacher, student and survey.
    """
    school = School(slug="northside", name="Northside High")
    other = School(slug="southside", name="Southside High")
    db.add_all([school, other]); db.flush()

    admin = _user(db, school, "admin@northside.edu", "admin", "Nora Admin")
    teacher = _user(db, school, "teacher@northside.edu", "teacher", "Tom Teacher")
    other_teacher = _user(db, school, "olga@northside.edu", "teacher", "Olga Other")
    foreign_teacher = _user(db, other, "teacher@southside.edu", "teacher", "Sam South")
    ana = _user(db, school, "ana@northside.edu", "student", "Ana Alvarez")
    ben = _user(db, school, "ben@northside.edu", "student", "Ben Brooks")
    cleo = _user(db, school, "cleo@northside.edu", "student", "Cleo Carter")
    dev = _user(db, school, "dev@northside.edu", "student", "Dev Dutta")
    zoe = _user(db, other, "zoe@southside.edu", "student", "Zoe Zimmer")
    db.flush()

    course = Course(school_id=school.id, teacher_id=teacher.id, name="Algebra I", class_number="9A")
    other_course = Course(school_id=school.id, teacher_id=other_teacher.id, name="Biology", class_number="9B")
    foreign_course = Course(school_id=other.id, teacher_id=foreign_teacher.id, name="Chemistry")
    db.add_all([course, other_course, foreign_course]); db.flush()

    for s in (ana, ben, cleo, dev):
        db.add(CourseEnrollment(school_id=school.id, course_id=course.id, student_id=s.id))
    db.add(CourseEnrollment(school_id=other.id, course_id=foreign_course.id, student_id=zoe.id))

    survey = Survey(school_id=school.id, course_id=course.id, title="Week 1 check-in",
                    created_at=BASE_TIME)
    second = Survey(school_id=school.id, course_id=course.id, title="Week 2 check-in",
                    created_at=BASE_TIME + timedelta(days=7))
    bio_survey = Survey(school_id=school.id, course_id=other_course.id, title="Lab safety")
    foreign_survey = Survey(school_id=other.id, course_id=foreign_course.id, title="Southside survey")
    db.add_all([survey, second, bio_survey, foreign_survey]); db.flush()

    clarity = SurveyQuestion(survey_id=survey.id, question_text="How clear was the lesson?",
                             question_type="rating", order_index=1)
    pace = SurveyQuestion(survey_id=survey.id, question_text="How was the pace?",
                          question_type="rating", order_index=2)
    comment = SurveyQuestion(survey_id=survey.id, question_text="Anything else?",
                             question_type="text", order_index=3)
    w2 = SurveyQuestion(survey_id=second.id, question_text="How confident do you feel?",
                        question_type="rating", order_index=1)
    foreign_q = SurveyQuestion(survey_id=foreign_survey.id, question_text="Rate the class",
                               question_type="rating", order_index=1)
    db.add_all([clarity, pace, comment, w2, foreign_q]); db.flush()

    _answer(db, survey, clarity, ana, "5", 1)
    _answer(db, survey, pace, ana, "4", 2)
    _answer(db, survey, comment, ana, "Great class", 3)
    _answer(db, survey, clarity, ben, "3", 4)
    _answer(db, survey, comment, cleo, "No comment", 5)
    _answer(db, second, w2, ana, "5", 60 * 24 * 7)
    _answer(db, foreign_survey, foreign_q, zoe, "1", 6)
    db.commit()

    return World(
        school=school, other_school=other, admin=admin, teacher=teacher,
        other_teacher=other_teacher, foreign_teacher=foreign_teacher,
        course=course, other_course=other_course,
        survey=survey, second_survey=second, other_course_survey=bio_survey,
        foreign_survey=foreign_survey,
        students=[ana, ben, cleo, dev],
        questions={"clarity": clarity, "pace": pace, "comment": comment, "w2": w2},
    )

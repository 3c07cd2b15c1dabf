# schoolhub/services/responses.py
"""Tenant-scoped reads feeding the analytics pipeline.

Every query filters on the caller's school; the analytics functions never
see rows from another tenant and never touch the database themselves.
"""
from __future__ import annotations

import logging
from typing import Dict, List, Optional
from uuid import UUID

from fastapi import HTTPException
from sqlalchemy.orm import Session

from schoolhub.analytics.models import StudentRef, SurveyResponse
from schoolhub.core.context import RequestContext
from schoolhub.models.course import Course, CourseEnrollment
from schoolhub.models.survey import Survey, SurveyQuestion, SurveyResponse as SurveyResponseRow
from schoolhub.models.user import User

logger = logging.getLogger(__name__)


def get_survey_for_context(db: Session, survey_id: UUID, ctx: RequestContext) -> Survey:
    s = (
        db.query(Survey)
        .filter(Survey.id == survey_id, Survey.school_id == ctx.school_id)
        .first()
    )
    # A survey of another school looks exactly like a missing one
    if not s:
        raise HTTPException(404, "Survey not found")
    if not ctx.is_admin:
        owner = db.query(Course.teacher_id).filter(Course.id == s.course_id).scalar()
        if owner != ctx.user_id:
            raise HTTPException(403, "Survey belongs to another teacher's course")
    return s


def list_courses_for_context(db: Session, ctx: RequestContext, course_id: Optional[UUID] = None) -> List[Course]:
    q = db.query(Course).filter(Course.school_id == ctx.school_id)
    if not ctx.is_admin:
        q = q.filter(Course.teacher_id == ctx.user_id)
    if course_id is not None:
        q = q.filter(Course.id == course_id)
    return q.order_by(Course.name).all()


def list_surveys_for_context(db: Session, ctx: RequestContext, course_ids: Optional[List[UUID]] = None) -> List[Survey]:
    """Surveys of the caller's courses (the whole school for admins), newest first."""
    if course_ids is None:
        course_ids = [c.id for c in list_courses_for_context(db, ctx)]
    if not course_ids:
        return []
    return (
        db.query(Survey)
        .filter(Survey.school_id == ctx.school_id, Survey.course_id.in_(course_ids))
        .order_by(Survey.created_at.desc(), Survey.title)
        .all()
    )


def fetch_responses_for_survey(db: Session, survey_id: UUID, ctx: RequestContext) -> List[SurveyResponse]:
    """All answers of one survey joined with question metadata and student."""
    rows = (
        db.query(
            SurveyResponseRow.student_id,
            SurveyResponseRow.question_id,
            SurveyResponseRow.response_value,
            SurveyResponseRow.submitted_at,
            SurveyQuestion.question_text,
            SurveyQuestion.question_type,
            User.full_name,
        )
        .join(SurveyQuestion, SurveyQuestion.id == SurveyResponseRow.question_id)
        .join(Survey, Survey.id == SurveyResponseRow.survey_id)
        .join(User, User.id == SurveyResponseRow.student_id)
        .filter(
            SurveyResponseRow.survey_id == survey_id,
            SurveyResponseRow.school_id == ctx.school_id,
            Survey.school_id == ctx.school_id,
            User.school_id == ctx.school_id,
        )
        .order_by(SurveyResponseRow.submitted_at, SurveyResponseRow.id)
        .all()
    )
    logger.debug("Fetched %d responses for survey=%s school=%s", len(rows), survey_id, ctx.school_id)

    return [
        SurveyResponse(
            student_id=r.student_id,
            question_id=r.question_id,
            question_text=r.question_text,
            question_type=r.question_type,
            response_value=r.response_value,
            submitted_at=r.submitted_at,
            student_name=r.full_name,
        )
        for r in rows
    ]


def fetch_enrolled_students(db: Session, course_id: UUID, ctx: RequestContext) -> List[StudentRef]:
    rows = (
        db.query(User.id, User.full_name)
        .join(CourseEnrollment, CourseEnrollment.student_id == User.id)
        .filter(
            CourseEnrollment.course_id == course_id,
            CourseEnrollment.school_id == ctx.school_id,
            CourseEnrollment.status == "active",
            User.school_id == ctx.school_id,
            User.status == "active",
        )
        .order_by(User.full_name, User.id)
        .all()
    )
    return [StudentRef(student_id=r.id, student_name=r.full_name) for r in rows]


def fetch_roster(db: Session, course_ids: List[UUID], ctx: RequestContext) -> List[StudentRef]:
    """Enrolled students across several courses, each student once."""
    seen: Dict[UUID, StudentRef] = {}
    for cid in course_ids:
        for s in fetch_enrolled_students(db, cid, ctx):
            seen.setdefault(s.student_id, s)
    return list(seen.values())

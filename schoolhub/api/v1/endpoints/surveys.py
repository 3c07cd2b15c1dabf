# schoolhub/api/v1/endpoints/surveys.py
from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from schoolhub.api.deps.staff import require_staff
from schoolhub.core.context import RequestContext
from schoolhub.db.session import get_db
from schoolhub.schemas.reports import SurveyListItem
from schoolhub.services.responses import list_courses_for_context, list_surveys_for_context

router = APIRouter(tags=["teacher"])

# Surveys the dashboard can pick from (the first one is the default selection)
@router.get("/teacher/surveys", response_model=List[SurveyListItem])
def teacher_surveys(
    course_id: Optional[UUID] = Query(None, description="Only surveys of this course"),
    db: Session = Depends(get_db),
    ctx: RequestContext = Depends(require_staff),
):
    courses = {c.id: c for c in list_courses_for_context(db, ctx, course_id)}
    surveys = list_surveys_for_context(db, ctx, list(courses))
    return [
        SurveyListItem(
            id=s.id,
            title=s.title,
            status=s.status,
            course_id=s.course_id,
            course_name=courses[s.course_id].name,
            created_at=s.created_at,
        )
        for s in surveys
    ]

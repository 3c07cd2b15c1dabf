# schoolhub/api/v1/endpoints/reports.py
import csv
import io
import logging
from dataclasses import asdict
from io import BytesIO
from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Path, Query, Request
from fastapi.responses import StreamingResponse
from openpyxl import Workbook
from sqlalchemy.orm import Session

from schoolhub.analytics.models import PerformanceTier, StudentPerformance
from schoolhub.analytics.students import compute_student_performance
from schoolhub.analytics.summary import compute_class_summary
from schoolhub.analytics.tracker import compute_insights, compute_student_profiles
from schoolhub.api.deps.staff import require_staff
from schoolhub.core.config import settings
from schoolhub.core.context import RequestContext
from schoolhub.db.session import get_db
from schoolhub.schemas.reports import (
    ClassSummaryOut, PerformanceInsightsOut, StudentPerformanceOut, StudentProfileOut,
)
from schoolhub.services.audit import audit_log
from schoolhub.services.responses import (
    fetch_enrolled_students, fetch_responses_for_survey, fetch_roster,
    get_survey_for_context, list_courses_for_context, list_surveys_for_context,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/reports", tags=["reports"])

XLSX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"


def _survey_performance(db: Session, survey_id: UUID, ctx: RequestContext):
    survey = get_survey_for_context(db, survey_id, ctx)
    responses = fetch_responses_for_survey(db, survey_id, ctx)
    return survey, responses, compute_student_performance(responses)


def _iso(value) -> Optional[str]:
    return value.isoformat() if value is not None else None


def _profiles(db: Session, ctx: RequestContext, course_id: Optional[UUID]):
    courses = list_courses_for_context(db, ctx, course_id)
    course_ids = [c.id for c in courses]
    roster = fetch_roster(db, course_ids, ctx)
    surveys = list_surveys_for_context(db, ctx, course_ids)
    by_survey = {s.id: fetch_responses_for_survey(db, s.id, ctx) for s in surveys}
    titles = {s.id: s.title for s in surveys}
    logger.debug("Tracking %d students over %d surveys", len(roster), len(surveys))
    return compute_student_profiles(roster, by_survey, titles)


# 1) STUDENTS of one survey
@router.get("/surveys/{survey_id}/students", response_model=List[StudentPerformanceOut])
def survey_students(
    survey_id: UUID = Path(..., description="Survey id"),
    tier: Optional[PerformanceTier] = Query(None, description="Only students of this tier"),
    q: Optional[str] = Query(None, description="Case-insensitive name search"),
    db: Session = Depends(get_db),
    ctx: RequestContext = Depends(require_staff),
):
    _, _, performance = _survey_performance(db, survey_id, ctx)

    if tier is not None:
        performance = [p for p in performance if p.tier == tier]
    if q:
        needle = q.strip().lower()
        performance = [p for p in performance if needle in (p.student_name or "").lower()]

    return [StudentPerformanceOut(**asdict(p)) for p in performance]


# 2) CLASS SUMMARY of one survey
@router.get("/surveys/{survey_id}/summary", response_model=ClassSummaryOut)
def survey_summary(
    survey_id: UUID = Path(..., description="Survey id"),
    db: Session = Depends(get_db),
    ctx: RequestContext = Depends(require_staff),
):
    survey, responses, performance = _survey_performance(db, survey_id, ctx)
    enrolled = [s.student_id for s in fetch_enrolled_students(db, survey.course_id, ctx)]
    summary = compute_class_summary(responses, performance, enrolled=enrolled)
    return ClassSummaryOut(survey_id=survey.id, **asdict(summary))


# 3) EXPORTS
@router.get("/surveys/{survey_id}/exports/students.csv")
def export_students_csv(
    request: Request,
    survey_id: UUID = Path(...),
    include_ids: bool = Query(False),
    db: Session = Depends(get_db),
    ctx: RequestContext = Depends(require_staff),
):
    _, _, performance = _survey_performance(db, survey_id, ctx)

    audit_log(db, ctx, action="report.export.students_csv",
              payload={"survey_id": str(survey_id), "rows": len(performance)}, request=request)
    db.commit()

    def stream():
        output = io.StringIO()
        writer = csv.writer(output)
        headers = (["student_id"] if include_ids else []) + [
            "student_name", "average_score", "response_count", "last_response_at", "tier"
        ]
        writer.writerow(headers); yield output.getvalue(); output.seek(0); output.truncate(0)

        for p in performance:
            row = []
            if include_ids: row.append(str(p.student_id))
            row += [p.student_name, p.average_score, p.response_count,
                    _iso(p.last_response_at), p.tier.value]
            writer.writerow(row); yield output.getvalue(); output.seek(0); output.truncate(0)

    filename = f"students_{survey_id}.csv"
    return StreamingResponse(stream(), media_type="text/csv",
                             headers={"Content-Disposition": f'attachment; filename="{filename}"'})


def _student_row(p: StudentPerformance) -> list:
    return [str(p.student_id), p.student_name, p.average_score, p.response_count,
            _iso(p.last_response_at), p.tier.value]


@router.get("/surveys/{survey_id}/exports/summary.xlsx")
def export_summary_xlsx(
    request: Request,
    survey_id: UUID = Path(...),
    db: Session = Depends(get_db),
    ctx: RequestContext = Depends(require_staff),
):
    survey, responses, performance = _survey_performance(db, survey_id, ctx)
    enrolled = [s.student_id for s in fetch_enrolled_students(db, survey.course_id, ctx)]
    summary = compute_class_summary(responses, performance, enrolled=enrolled)

    wb = Workbook()
    ws_sum = wb.active; ws_sum.title = "Summary"
    ws_sum.append(["survey", "total_responses", "average_score", "participation_rate",
                   "respondents", "enrolled", "roster_participation_rate"])
    ws_sum.append([survey.title, summary.total_responses, summary.average_score,
                   summary.participation_rate, summary.respondent_count,
                   summary.enrolled_count, summary.roster_participation_rate])

    # Students (excel has no timezones: timestamps go out as ISO text)
    ws_st = wb.create_sheet("Students")
    ws_st.append(["student_id", "student_name", "average_score", "response_count",
                  "last_response_at", "tier"])
    for p in performance:
        ws_st.append(_student_row(p))

    ws_q = wb.create_sheet("Questions")
    ws_q.append(["question", "question_type", "average_score", "response_count"])
    for qb in summary.question_breakdown:
        ws_q.append([qb.question, qb.question_type, qb.average_score, qb.response_count])

    audit_log(db, ctx, action="report.export.summary_xlsx",
              payload={"survey_id": str(survey_id)}, request=request)
    db.commit()

    buf = BytesIO(); wb.save(buf); buf.seek(0)
    filename = f"survey_{survey_id}.xlsx"
    return StreamingResponse(iter([buf.getvalue()]), media_type=XLSX_MEDIA_TYPE,
                             headers={"Content-Disposition": f'attachment; filename="{filename}"'})


# 4) ACROSS SURVEYS: enrolled students of the caller's courses
@router.get("/students", response_model=List[StudentProfileOut])
def student_profiles(
    course_id: Optional[UUID] = Query(None, description="Restrict to one course"),
    tier: Optional[PerformanceTier] = Query(None),
    db: Session = Depends(get_db),
    ctx: RequestContext = Depends(require_staff),
):
    profiles = _profiles(db, ctx, course_id)
    if tier is not None:
        profiles = [p for p in profiles if p.tier == tier]
    return [StudentProfileOut(**asdict(p)) for p in profiles]


@router.get("/insights", response_model=PerformanceInsightsOut)
def performance_insights(
    course_id: Optional[UUID] = Query(None, description="Restrict to one course"),
    db: Session = Depends(get_db),
    ctx: RequestContext = Depends(require_staff),
):
    insights = compute_insights(_profiles(db, ctx, course_id), settings.LOW_PARTICIPATION_THRESHOLD)
    return PerformanceInsightsOut(**asdict(insights))

# schoolhub/analytics/tracker.py
"""Cross-survey tracking of enrolled students.

Where the class summary looks at one survey and only at respondents, the
tracker starts from the enrolled roster and follows each student across all
surveys of the teacher's courses. A survey only counts towards a student's
overall score when the student has a positive scored mean in it.
"""
from __future__ import annotations

from typing import Dict, List, Mapping, Optional, Sequence
from uuid import UUID

from schoolhub.analytics.models import (
    PerformanceInsights, PerformanceTier, StudentProfile, StudentRef,
    SurveyResponse, SurveyScore,
)
from schoolhub.analytics.normalizer import normalize_responses
from schoolhub.analytics.students import group_by_student, latest_submission
from schoolhub.analytics.tiers import classify_tier, mean, ranked, round_half_up

DEFAULT_LOW_PARTICIPATION = 80.0

_FEEDBACK: Dict[PerformanceTier, Dict[str, List[str]]] = {
    PerformanceTier.EXCELLING: {
        "strengths": [
            "Consistently high performance across surveys",
            "Strong engagement and participation",
        ],
        "weaknesses": [],
        "recommendations": [
            "Provide advanced challenges",
            "Consider leadership opportunities",
        ],
    },
    PerformanceTier.GOOD: {
        "strengths": ["Above average performance"],
        "weaknesses": [],
        "recommendations": [
            "Continue current support level",
            "Identify areas for growth",
        ],
    },
    PerformanceTier.STRUGGLING: {
        "strengths": [],
        "weaknesses": [
            "Below average performance",
            "May need additional support",
        ],
        "recommendations": [
            "Schedule one-on-one meeting",
            "Provide additional resources",
            "Consider peer support",
        ],
    },
    PerformanceTier.NO_DATA: {
        "strengths": [],
        "weaknesses": ["No survey responses"],
        "recommendations": [
            "Encourage participation",
            "Check for technical issues",
        ],
    },
}


def _survey_score(
    survey_id: UUID,
    rows: Sequence[SurveyResponse],
    title: Optional[str],
) -> tuple[Optional[SurveyScore], float]:
    raw = mean([s.score for s in normalize_responses(rows)])
    if raw <= 0:
        return None, 0.0
    score = SurveyScore(
        survey_id=survey_id,
        survey_title=title,
        score=round_half_up(raw, 1),
        response_count=len(rows),
        last_response_at=latest_submission(rows),
    )
    return score, raw


def build_profile(
    student: StudentRef,
    per_survey: Mapping[UUID, Sequence[SurveyResponse]],
    survey_titles: Optional[Mapping[UUID, str]] = None,
) -> StudentProfile:
    """Profile of one student given that student's rows grouped by survey."""
    titles = survey_titles or {}
    scores: List[SurveyScore] = []
    raws: List[float] = []
    for survey_id, rows in per_survey.items():
        score, raw = _survey_score(survey_id, rows, titles.get(survey_id))
        if score is not None:
            scores.append(score)
            raws.append(raw)

    overall = mean(raws)
    tier = classify_tier(overall)
    stamps = [s.last_response_at for s in scores if s.last_response_at is not None]
    feedback = _FEEDBACK[tier]

    return StudentProfile(
        student_id=student.student_id,
        student_name=student.student_name,
        overall_score=round_half_up(overall, 1),
        response_count=sum(s.response_count for s in scores),
        last_response_at=max(stamps) if stamps else None,
        tier=tier,
        survey_scores=scores,
        strengths=list(feedback["strengths"]),
        weaknesses=list(feedback["weaknesses"]),
        recommendations=list(feedback["recommendations"]),
    )


def compute_student_profiles(
    students: Sequence[StudentRef],
    responses_by_survey: Mapping[UUID, Sequence[SurveyResponse]],
    survey_titles: Optional[Mapping[UUID, str]] = None,
) -> List[StudentProfile]:
    """One profile per roster student, in roster order.

    Rows of students who are not on the roster are ignored.
    """
    by_student: Dict[UUID, Dict[UUID, List[SurveyResponse]]] = {}
    for survey_id, rows in responses_by_survey.items():
        for student_id, student_rows in group_by_student(rows).items():
            by_student.setdefault(student_id, {})[survey_id] = student_rows

    return [
        build_profile(s, by_student.get(s.student_id, {}), survey_titles)
        for s in students
    ]


def compute_insights(
    profiles: Sequence[StudentProfile],
    low_participation_threshold: float = DEFAULT_LOW_PARTICIPATION,
) -> PerformanceInsights:
    count = len(profiles)
    class_average = mean([p.overall_score for p in profiles])
    active = sum(1 for p in profiles if p.response_count > 0)
    participation = (active / count) * 100 if count else 0.0

    top = ranked(profiles, PerformanceTier.EXCELLING, key=lambda p: p.overall_score, descending=True)
    struggling = ranked(profiles, PerformanceTier.STRUGGLING, key=lambda p: p.overall_score, descending=False)

    notes: List[str] = []
    if struggling:
        notes.append(f"Consider reaching out to {len(struggling)} students with low scores")
    if count and participation < low_participation_threshold:
        notes.append("Consider sending reminders to increase survey participation")

    return PerformanceInsights(
        class_average=round_half_up(class_average, 1),
        participation_rate=round_half_up(participation, 1),
        student_count=count,
        top_performers=top,
        struggling_students=struggling,
        recommendations=notes,
    )

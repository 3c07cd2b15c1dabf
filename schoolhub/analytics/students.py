# schoolhub/analytics/students.py
from __future__ import annotations

from datetime import datetime
from typing import Dict, Iterable, List, Optional, Sequence
from uuid import UUID

from schoolhub.analytics.models import PerformanceTier, StudentPerformance, SurveyResponse
from schoolhub.analytics.normalizer import normalize_responses
from schoolhub.analytics.tiers import classify_tier, mean, round_half_up


def group_by_student(responses: Iterable[SurveyResponse]) -> Dict[UUID, List[SurveyResponse]]:
    """Partition rows by student, students in order of first appearance."""
    groups: Dict[UUID, List[SurveyResponse]] = {}
    for r in responses:
        groups.setdefault(r.student_id, []).append(r)
    return groups


def latest_submission(responses: Iterable[SurveyResponse]) -> Optional[datetime]:
    stamps = [r.submitted_at for r in responses if r.submitted_at is not None]
    return max(stamps) if stamps else None


def _student_name(responses: Sequence[SurveyResponse]) -> Optional[str]:
    for r in responses:
        if r.student_name:
            return r.student_name
    return None


def summarize_student(student_id: UUID, responses: Sequence[SurveyResponse]) -> StudentPerformance:
    """Performance of one student from that student's full set of answers.

    ``response_count`` and ``last_response_at`` always look at every answer,
    the average only at scorable ratings.
    """
    scores = [s.score for s in normalize_responses(responses)]
    if scores:
        raw = mean(scores)
        average = round_half_up(raw, 1)
        tier = classify_tier(raw)
    else:
        average = 0.0
        tier = PerformanceTier.NO_DATA

    return StudentPerformance(
        student_id=student_id,
        student_name=_student_name(responses),
        average_score=average,
        response_count=len(responses),
        last_response_at=latest_submission(responses),
        tier=tier,
    )


def compute_student_performance(responses: Sequence[SurveyResponse]) -> List[StudentPerformance]:
    """One :class:`StudentPerformance` per student present in *responses*.

    Students who never answered are not part of the input and so are not
    reported; pass the roster to the class summary to measure them.
    """
    return [
        summarize_student(student_id, rows)
        for student_id, rows in group_by_student(responses).items()
    ]

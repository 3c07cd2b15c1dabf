# schoolhub/analytics/summary.py
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional, Sequence
from uuid import UUID

from schoolhub.analytics.models import (
    ClassSummary, PerformanceTier, QuestionBreakdown, QuestionType,
    StudentPerformance, SurveyResponse,
)
from schoolhub.analytics.normalizer import normalize_responses, parse_score
from schoolhub.analytics.tiers import mean, ranked, round_half_up

logger = logging.getLogger(__name__)


def pooled_average(responses: Sequence[SurveyResponse]) -> float:
    """Mean over every scored answer. Students who answer more weigh more."""
    scores = [s.score for s in normalize_responses(responses)]
    return mean(scores)


@dataclass
class _QuestionTally:
    question_type: str
    scores: List[int] = field(default_factory=list)
    count: int = 0


def question_breakdown(responses: Iterable[SurveyResponse]) -> List[QuestionBreakdown]:
    """Per question text: average of its numeric ratings and its row count.

    Non-rating questions report an average of 0 and just the raw count.
    """
    tallies: Dict[str, _QuestionTally] = {}
    for r in responses:
        t = tallies.setdefault(r.question_text, _QuestionTally(question_type=r.question_type))
        if r.question_type == QuestionType.RATING.value:
            score = parse_score(r.response_value)
            if score is not None:
                t.scores.append(score)
        t.count += 1

    return [
        QuestionBreakdown(
            question=text,
            question_type=str(t.question_type),
            average_score=round_half_up(mean(t.scores), 1) if t.scores else 0.0,
            response_count=t.count,
        )
        for text, t in tallies.items()
    ]


def tier_counts(performance: Iterable[StudentPerformance]) -> Dict[str, int]:
    counts = {t.value: 0 for t in PerformanceTier}
    for p in performance:
        counts[PerformanceTier(p.tier).value] += 1
    return counts


def compute_class_summary(
    responses: Sequence[SurveyResponse],
    performance: Sequence[StudentPerformance],
    enrolled: Optional[Iterable[UUID]] = None,
) -> ClassSummary:
    """Class-wide view of one survey.

    ``participation_rate`` keeps the dashboard definition: answers per
    respondent times 100, so it can exceed 100. When the *enrolled* roster is
    given, ``roster_participation_rate`` is the share of enrolled students who
    answered at least once.
    """
    total = len(responses)
    respondents = len(performance)
    participation = (total / respondents) * 100 if respondents else 0.0

    enrolled_count = None
    roster_rate = None
    if enrolled is not None:
        roster = set(enrolled)
        enrolled_count = len(roster)
        answered = {p.student_id for p in performance} & roster
        roster_rate = round_half_up(len(answered) / enrolled_count * 100, 1) if enrolled_count else 0.0

    logger.debug(
        "Class summary: responses=%d respondents=%d enrolled=%s", total, respondents, enrolled_count
    )

    return ClassSummary(
        total_responses=total,
        average_score=round_half_up(pooled_average(responses), 2),
        participation_rate=round_half_up(participation, 1),
        respondent_count=respondents,
        top_performers=ranked(
            performance, PerformanceTier.EXCELLING,
            key=lambda p: p.average_score, descending=True,
        ),
        struggling_students=ranked(
            performance, PerformanceTier.STRUGGLING,
            key=lambda p: p.average_score, descending=False,
        ),
        question_breakdown=question_breakdown(responses),
        tier_counts=tier_counts(performance),
        enrolled_count=enrolled_count,
        roster_participation_rate=roster_rate,
    )

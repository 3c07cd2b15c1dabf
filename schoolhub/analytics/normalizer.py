# schoolhub/analytics/normalizer.py
from __future__ import annotations

import re
from typing import Iterable, List, Optional

from schoolhub.analytics.models import QuestionType, ScoredResponse, SurveyResponse

_LEADING_INTEGER = re.compile(r"\s*([+-]?[0-9]+)")


def parse_score(value: Optional[str]) -> Optional[int]:
    """Leading integer of a stored rating ("4.5" -> 4, "5 stars" -> 5).

    None when the value does not start with an integer.
    """
    if value is None:
        return None
    m = _LEADING_INTEGER.match(str(value))
    if not m:
        return None
    return int(m.group(1))


def normalize_responses(responses: Iterable[SurveyResponse]) -> List[ScoredResponse]:
    """Keep the rating answers that carry a numeric value.

    Malformed ratings are dropped rather than scored as zero, so old rows
    with free text in a rating field never drag an average down.
    """
    scored: List[ScoredResponse] = []
    for r in responses:
        if r.question_type != QuestionType.RATING.value:
            continue
        score = parse_score(r.response_value)
        if score is None:
            continue
        scored.append(ScoredResponse(
            student_id=r.student_id,
            question_id=r.question_id,
            score=score,
            submitted_at=r.submitted_at,
        ))
    return scored

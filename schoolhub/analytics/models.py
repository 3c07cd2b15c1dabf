# schoolhub/analytics/models.py
"""Value types shared by the survey analytics pipeline.

Everything here is an immutable, in-memory view over rows that were already
fetched for one survey (or one set of surveys). Nothing is persisted.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Dict, List, Optional
from uuid import UUID


class QuestionType(str, Enum):
    RATING = "rating"
    MULTIPLE_CHOICE = "multiple_choice"
    TEXT = "text"


class PerformanceTier(str, Enum):
    EXCELLING = "excelling"
    GOOD = "good"
    STRUGGLING = "struggling"
    NO_DATA = "no_data"


@dataclass(frozen=True, slots=True)
class SurveyResponse:
    """One stored answer, already joined with its question and student."""

    student_id: UUID
    question_id: UUID
    question_text: str
    question_type: str
    response_value: Optional[str]
    submitted_at: Optional[datetime] = None
    student_name: Optional[str] = None


@dataclass(frozen=True, slots=True)
class ScoredResponse:
    student_id: UUID
    question_id: UUID
    score: int
    submitted_at: Optional[datetime] = None


@dataclass(frozen=True, slots=True)
class StudentPerformance:
    student_id: UUID
    average_score: float
    response_count: int
    tier: PerformanceTier
    last_response_at: Optional[datetime] = None
    student_name: Optional[str] = None


@dataclass(frozen=True, slots=True)
class QuestionBreakdown:
    question: str
    question_type: str
    average_score: float
    response_count: int


@dataclass(frozen=True, slots=True)
class ClassSummary:
    total_responses: int
    average_score: float
    participation_rate: float
    respondent_count: int
    top_performers: List[StudentPerformance] = field(default_factory=list)
    struggling_students: List[StudentPerformance] = field(default_factory=list)
    question_breakdown: List[QuestionBreakdown] = field(default_factory=list)
    tier_counts: Dict[str, int] = field(default_factory=dict)
    # Only set when the enrolled roster was supplied
    enrolled_count: Optional[int] = None
    roster_participation_rate: Optional[float] = None


# ---- cross-survey tracking ----

@dataclass(frozen=True, slots=True)
class StudentRef:
    student_id: UUID
    student_name: Optional[str] = None


@dataclass(frozen=True, slots=True)
class SurveyScore:
    survey_id: UUID
    score: float
    response_count: int
    last_response_at: Optional[datetime] = None
    survey_title: Optional[str] = None


@dataclass(frozen=True, slots=True)
class StudentProfile:
    student_id: UUID
    overall_score: float
    response_count: int
    tier: PerformanceTier
    last_response_at: Optional[datetime] = None
    student_name: Optional[str] = None
    survey_scores: List[SurveyScore] = field(default_factory=list)
    strengths: List[str] = field(default_factory=list)
    weaknesses: List[str] = field(default_factory=list)
    recommendations: List[str] = field(default_factory=list)


@dataclass(frozen=True, slots=True)
class PerformanceInsights:
    class_average: float
    participation_rate: float
    student_count: int
    top_performers: List[StudentProfile] = field(default_factory=list)
    struggling_students: List[StudentProfile] = field(default_factory=list)
    recommendations: List[str] = field(default_factory=list)

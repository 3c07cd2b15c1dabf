# schoolhub/schemas/reports.py
from datetime import datetime
from uuid import UUID
from typing import Optional, List, Dict
from pydantic import BaseModel, Field

from schoolhub.analytics.models import PerformanceTier


class SurveyListItem(BaseModel):
    id: UUID
    title: str
    status: str
    course_id: UUID
    course_name: Optional[str] = None
    created_at: Optional[datetime] = None

# ---- one survey ----
class StudentPerformanceOut(BaseModel):
    student_id: UUID
    student_name: Optional[str] = None
    average_score: float
    response_count: int
    last_response_at: Optional[datetime] = None
    tier: PerformanceTier

class QuestionBreakdownOut(BaseModel):
    question: str
    question_type: str
    average_score: float
    response_count: int

class ClassSummaryOut(BaseModel):
    survey_id: UUID
    total_responses: int
    average_score: float
    participation_rate: float   # responses per respondent x 100, can exceed 100
    respondent_count: int
    top_performers: List[StudentPerformanceOut] = Field(default_factory=list)
    struggling_students: List[StudentPerformanceOut] = Field(default_factory=list)
    question_breakdown: List[QuestionBreakdownOut] = Field(default_factory=list)
    tier_counts: Dict[str, int] = Field(default_factory=dict)
    enrolled_count: Optional[int] = None
    roster_participation_rate: Optional[float] = None

# ---- across surveys ----
class SurveyScoreOut(BaseModel):
    survey_id: UUID
    survey_title: Optional[str] = None
    score: float
    response_count: int
    last_response_at: Optional[datetime] = None

class StudentProfileOut(BaseModel):
    student_id: UUID
    student_name: Optional[str] = None
    overall_score: float
    response_count: int
    last_response_at: Optional[datetime] = None
    tier: PerformanceTier
    survey_scores: List[SurveyScoreOut] = Field(default_factory=list)
    strengths: List[str] = Field(default_factory=list)
    weaknesses: List[str] = Field(default_factory=list)
    recommendations: List[str] = Field(default_factory=list)

class PerformanceInsightsOut(BaseModel):
    class_average: float
    participation_rate: float   # share of roster students with any response
    student_count: int
    top_performers: List[StudentProfileOut] = Field(default_factory=list)
    struggling_students: List[StudentProfileOut] = Field(default_factory=list)
    recommendations: List[str] = Field(default_factory=list)

from pydantic import BaseModel, EmailStr, Field, field_validator
from uuid import UUID
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from app.models.base import CamelModel
from app.models.enumerations import MaturityRating


class UserInfo(CamelModel):
    """
    Respondent details collected before submission.
    """

    name: str = Field(..., min_length=1, max_length=255, description="Respondent name")
    email: EmailStr = Field(..., description="Respondent email")
    company_name: str = Field(..., min_length=1, max_length=255, description="Organization being assessed")
    location: str = Field(..., min_length=1, max_length=255, description="Organization location")

    @field_validator("name", "company_name", "location")
    @classmethod
    def strip_not_blank(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("must not be blank")
        return v


class Answer(CamelModel):
    """
    A selected option. Score is recomputed server-side from the rubric.
    """

    question_id: str = Field(..., min_length=1)
    value: str = Field(..., min_length=1)
    score: Optional[float] = None


class ScoredAnswer(CamelModel):
    question_id: str
    value: str
    score: int = Field(..., ge=0, le=4)


class ClusterScore(CamelModel):
    """
    Per-category result.
    """

    cluster_id: str
    cluster_title: str
    score: int = Field(..., ge=0)
    max_score: int = Field(..., ge=0)
    percentage: int = Field(..., ge=0, le=100)


class AssessmentScore(CamelModel):
    """
    Output of MaturityCalculator.calculate().
    """

    answers: List[ScoredAnswer]
    cluster_scores: List[ClusterScore]
    total_score: int = Field(..., ge=0)
    max_total_score: int = Field(..., ge=0)
    overall_percentage: int = Field(..., ge=0, le=100)


class ScoreRequest(CamelModel):
    answers: List[Answer] = Field(..., min_length=1)


class AssessmentSubmission(CamelModel):
    """
    Body of POST /submit-assessment.

    Client-computed totals are accepted for compatibility and discarded.
    """

    user_info: UserInfo
    answers: List[Answer] = Field(..., min_length=1)
    cluster_scores: Optional[List[Dict[str, Any]]] = None
    total_score: Optional[float] = None
    max_total_score: Optional[float] = None
    overall_percentage: Optional[float] = None


class AssessmentRecord(CamelModel):
    """
    Stored submission, as persisted under assessment:{id}.
    """

    id: UUID
    user_name: str
    user_email: str
    company_name: str
    location: str
    answers: List[ScoredAnswer]
    cluster_scores: List[ClusterScore]
    total_score: int = Field(..., ge=0)
    max_total_score: int = Field(..., ge=0)
    overall_percentage: int = Field(..., ge=0, le=100)
    submitted_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        description="Submission timestamp (UTC)"
    )


class SubmitResponse(CamelModel):
    success: bool = True
    assessment_id: UUID


class AssessmentSummary(CamelModel):
    """
    Rating counts over a set of assessments.
    """

    total: int = 0
    good: int = 0
    moderate: int = 0
    needs_improvement: int = 0


class AssessmentListResponse(CamelModel):
    assessments: List[AssessmentRecord]
    summary: AssessmentSummary


class ImprovementArea(CamelModel):
    cluster_id: str
    cluster_title: str
    percentage: int
    description: str


class ReportResponse(CamelModel):
    """
    Structured report for a stored assessment.
    """

    assessment: AssessmentRecord
    rating: MaturityRating
    category_ratings: Dict[str, str]
    improvement_areas: List[ImprovementArea]
    all_categories_strong: bool
    recommendations: List[str]


class ErrorResponse(BaseModel):
    """
    Standard error response model.
    """

    error: str = Field(..., description="Human-readable error message")
    error_code: str = Field(..., description="Machine-readable error code")
    details: Optional[dict] = Field(default=None, description="Additional error details")
    timestamp: datetime = Field(..., description="Error occurrence timestamp")

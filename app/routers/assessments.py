"""
Assessments Router - ISO 27001 Risk Assessment
app/routers/assessments.py

Submission, retrieval, dashboard listing and report downloads.
"""

import io
import logging
from typing import Optional
from urllib.parse import quote
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status
from fastapi.responses import StreamingResponse

from app.core.dependencies import get_assessment_repository, get_maturity_calculator
from app.core.exceptions import EntityNotFoundException
from app.core.security import require_auth
from app.models.assessment import (
    AssessmentListResponse,
    AssessmentRecord,
    AssessmentSubmission,
    ErrorResponse,
    ReportResponse,
    SubmitResponse,
)
from app.models.auth import AuthenticatedUser
from app.models.enumerations import SortField, SortOrder
from app.repositories.assessment_repository import AssessmentRepository
from app.scoring.maturity_calculator import MaturityCalculator
from app.scoring.recommendations import GENERAL_RECOMMENDATIONS, all_categories_strong, improvement_areas
from app.services.dashboard_service import browse
from app.services.report_generator import generate_assessment_report, generate_portfolio_summary
from app.services.report_pdf import build_assessment_pdf, report_filename

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Assessments"])


_NOT_FOUND = {
    404: {
        "model": ErrorResponse,
        "description": "Assessment not found",
        "content": {
            "application/json": {
                "example": {
                    "error": "Assessment not found",
                    "error_code": "ASSESSMENT_NOT_FOUND",
                    "details": None,
                    "timestamp": "2026-01-28T12:00:00Z"
                }
            }
        }
    },
}

_UNAUTHORIZED = {
    401: {
        "model": ErrorResponse,
        "description": "Missing or invalid bearer token",
        "content": {
            "application/json": {
                "example": {
                    "error": "Unauthorized",
                    "error_code": "UNAUTHORIZED",
                    "details": None,
                    "timestamp": "2026-01-28T12:00:00Z"
                }
            }
        }
    },
}


#  Helpers

def load_assessment(assessment_id: str, repo: AssessmentRepository) -> AssessmentRecord:
    """Fetch a record or raise EntityNotFoundException. Non-UUID ids are simply not found."""
    try:
        key = UUID(assessment_id)
    except ValueError:
        raise EntityNotFoundException("assessment", assessment_id)

    record = repo.get_by_id(key)
    if record is None:
        raise EntityNotFoundException("assessment", assessment_id)
    return record


def _attachment(filename: str) -> str:
    fallback = filename.encode("ascii", "ignore").decode("ascii") or "report"
    return f'attachment; filename="{fallback}"; filename*=UTF-8\'\'{quote(filename)}'


def _download(content: bytes, media_type: str, filename: str) -> StreamingResponse:
    buffer = io.BytesIO(content)
    buffer.seek(0)
    return StreamingResponse(
        content=buffer,
        media_type=media_type,
        headers={
            "Content-Disposition": _attachment(filename),
            "Content-Length": str(len(content)),
        },
    )


#  Routes

@router.post(
    "/submit-assessment",
    response_model=SubmitResponse,
    status_code=status.HTTP_200_OK,
    responses={
        400: {
            "model": ErrorResponse,
            "description": "Invalid assessment data",
            "content": {
                "application/json": {
                    "example": {
                        "error": "Invalid assessment data",
                        "error_code": "INCOMPLETE_ASSESSMENT",
                        "details": {"missing_questions": ["crypto-3"]},
                        "timestamp": "2026-01-28T12:00:00Z"
                    }
                }
            }
        },
        422: {
            "model": ErrorResponse,
            "description": "Validation error",
            "content": {
                "application/json": {
                    "example": {
                        "error": "Email must be a valid email address",
                        "error_code": "VALIDATION_ERROR",
                        "details": {"field": "userInfo.email", "type": "value_error"},
                        "timestamp": "2026-01-28T12:00:00Z"
                    }
                }
            }
        },
    },
    summary="Submit an assessment",
    description=(
        "Scores the answers against the question bank and stores the result. "
        "Client-computed scores in the body are ignored."
    ),
)
async def submit_assessment(
    payload: AssessmentSubmission,
    repo: AssessmentRepository = Depends(get_assessment_repository),
    calculator: MaturityCalculator = Depends(get_maturity_calculator),
) -> SubmitResponse:
    scores = calculator.calculate(payload.answers)

    if payload.overall_percentage is not None and payload.overall_percentage != scores.overall_percentage:
        logger.info(
            f"Client overall {payload.overall_percentage}% replaced by server value "
            f"{scores.overall_percentage}%"
        )

    record = repo.create(payload.user_info, scores)
    return SubmitResponse(assessment_id=record.id)


@router.get(
    "/assessments",
    response_model=AssessmentListResponse,
    responses={**_UNAUTHORIZED},
    summary="List assessments",
    description="All stored assessments with optional search and sorting. Requires a bearer token.",
)
async def list_assessments(
    q: Optional[str] = Query(default=None, description="Search name, email, company or location"),
    sort_by: SortField = Query(default=SortField.DATE),
    order: SortOrder = Query(default=SortOrder.DESC),
    user: AuthenticatedUser = Depends(require_auth),
    repo: AssessmentRepository = Depends(get_assessment_repository),
    calculator: MaturityCalculator = Depends(get_maturity_calculator),
) -> AssessmentListResponse:
    records = repo.list_all()
    assessments, summary = browse(records, q, sort_by, order, calculator)
    logger.info(f"User {user.id} listed {len(assessments)}/{len(records)} assessments")
    return AssessmentListResponse(assessments=assessments, summary=summary)


@router.get(
    "/assessments/report.md",
    responses={**_UNAUTHORIZED, 200: {"content": {"text/markdown": {}}}},
    summary="Portfolio summary (Markdown)",
    description="Ranks every stored assessment and compares category averages.",
)
async def download_portfolio_summary(
    user: AuthenticatedUser = Depends(require_auth),
    repo: AssessmentRepository = Depends(get_assessment_repository),
    calculator: MaturityCalculator = Depends(get_maturity_calculator),
):
    md_content = generate_portfolio_summary(repo.list_all(), calculator)
    return _download(md_content.encode("utf-8"), "text/markdown", "ISO27001-Portfolio-Summary.md")


@router.get(
    "/assessment/{assessment_id}",
    response_model=AssessmentRecord,
    responses={**_NOT_FOUND},
    summary="Get assessment by ID",
)
async def get_assessment(
    assessment_id: str,
    repo: AssessmentRepository = Depends(get_assessment_repository),
) -> AssessmentRecord:
    return load_assessment(assessment_id, repo)


@router.get(
    "/assessment/{assessment_id}/report",
    response_model=ReportResponse,
    responses={**_NOT_FOUND},
    summary="Assessment report",
    description="Overall rating, per-category ratings, improvement areas and recommendations.",
)
async def get_assessment_report(
    assessment_id: str,
    repo: AssessmentRepository = Depends(get_assessment_repository),
    calculator: MaturityCalculator = Depends(get_maturity_calculator),
) -> ReportResponse:
    record = load_assessment(assessment_id, repo)
    return ReportResponse(
        assessment=record,
        rating=calculator.rating(record.overall_percentage),
        category_ratings={
            cs.cluster_id: calculator.category_label(cs.percentage) for cs in record.cluster_scores
        },
        improvement_areas=improvement_areas(record.cluster_scores, calculator.good_threshold),
        all_categories_strong=all_categories_strong(record.cluster_scores, calculator.good_threshold),
        recommendations=list(GENERAL_RECOMMENDATIONS),
    )


@router.get(
    "/assessment/{assessment_id}/report.pdf",
    responses={**_NOT_FOUND, 200: {"content": {"application/pdf": {}}}},
    summary="Download PDF report",
)
async def download_pdf_report(
    assessment_id: str,
    repo: AssessmentRepository = Depends(get_assessment_repository),
    calculator: MaturityCalculator = Depends(get_maturity_calculator),
):
    record = load_assessment(assessment_id, repo)
    pdf = build_assessment_pdf(record, calculator)
    return _download(pdf, "application/pdf", report_filename(record))


@router.get(
    "/assessment/{assessment_id}/report.md",
    responses={**_NOT_FOUND, 200: {"content": {"text/markdown": {}}}},
    summary="Download Markdown report",
)
async def download_markdown_report(
    assessment_id: str,
    repo: AssessmentRepository = Depends(get_assessment_repository),
    calculator: MaturityCalculator = Depends(get_maturity_calculator),
):
    record = load_assessment(assessment_id, repo)
    md_content = generate_assessment_report(record, calculator)
    return _download(md_content.encode("utf-8"), "text/markdown", report_filename(record, "md"))

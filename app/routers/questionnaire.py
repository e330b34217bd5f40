"""
Questionnaire Router - ISO 27001 Risk Assessment
app/routers/questionnaire.py

Serves the question bank and scores answer sets without persisting them.
"""

from typing import List

from fastapi import APIRouter, Depends

from app.core.dependencies import get_maturity_calculator
from app.core.exceptions import EntityNotFoundException
from app.models.assessment import AssessmentScore, ErrorResponse, ScoreRequest
from app.models.questionnaire import QuestionBankResponse, QuestionCluster, QuestionClusterResponse
from app.scoring.maturity_calculator import MaturityCalculator
from app.scoring.questions import cluster_max_score, get_cluster, get_clusters, max_total_score

router = APIRouter(tags=["Questionnaire"])


def _cluster_response(cluster: QuestionCluster) -> QuestionClusterResponse:
    return QuestionClusterResponse(
        **cluster.model_dump(),
        max_score=cluster_max_score(cluster),
    )


@router.get(
    "/questions",
    response_model=QuestionBankResponse,
    summary="Question bank",
    description="All control clusters in questionnaire order, with options and scoring ceilings.",
)
async def list_questions() -> QuestionBankResponse:
    clusters: List[QuestionClusterResponse] = [_cluster_response(c) for c in get_clusters()]
    return QuestionBankResponse(
        clusters=clusters,
        total_questions=sum(len(c.questions) for c in clusters),
        max_total_score=max_total_score(),
    )


@router.get(
    "/questions/{cluster_id}",
    response_model=QuestionClusterResponse,
    responses={404: {"model": ErrorResponse, "description": "Cluster not found"}},
    summary="Single question cluster",
)
async def get_question_cluster(cluster_id: str) -> QuestionClusterResponse:
    cluster = get_cluster(cluster_id)
    if cluster is None:
        raise EntityNotFoundException("cluster", cluster_id)
    return _cluster_response(cluster)


@router.post(
    "/score",
    response_model=AssessmentScore,
    responses={
        400: {
            "model": ErrorResponse,
            "description": "Incomplete or invalid answers",
            "content": {
                "application/json": {
                    "example": {
                        "error": "Invalid assessment data",
                        "error_code": "INCOMPLETE_ASSESSMENT",
                        "details": {"missing_questions": ["policy-2"]},
                        "timestamp": "2026-01-28T12:00:00Z"
                    }
                }
            }
        },
    },
    summary="Score answers",
    description="Computes cluster and overall percentages for a complete answer set. Nothing is stored.",
)
async def score_answers(
    payload: ScoreRequest,
    calculator: MaturityCalculator = Depends(get_maturity_calculator),
) -> AssessmentScore:
    return calculator.calculate(payload.answers)

# app/scoring/maturity_calculator.py
"""
Maturity Calculator
-------------------
Scores a completed questionnaire against the ISO 27001 question bank.

Formula (per cluster c, in bank order):
    score_c       = Σ option score of each answer in c
    max_c         = len(questions_c) × 4
    percentage_c  = round_half_up(score_c / max_c × 100)

    total         = Σ score_c
    max_total     = Σ max_c
    overall       = round_half_up(total / max_total × 100)

Option scores always come from the rubric; a score sent by the client is
ignored.

Ratings:
    overall >= GOOD_THRESHOLD (75)      → Good
    overall >= MODERATE_THRESHOLD (50)  → Moderate
    otherwise                           → Needs Improvement
"""
import structlog
from typing import Dict, Iterable, List, Optional, Sequence, Union

from app.config import settings
from app.core.exceptions import IncompleteAssessmentException, InvalidAnswerException
from app.models.assessment import Answer, AssessmentScore, ClusterScore, ScoredAnswer
from app.models.enumerations import MaturityRating
from app.models.questionnaire import QuestionCluster
from app.scoring.questions import cluster_max_score, find_option, get_clusters
from app.scoring.utils import percentage

logger = structlog.get_logger(__name__)

AnswerInput = Union[Answer, Dict[str, object]]


class MaturityCalculator:
    """Calculate per-cluster and overall maturity percentages."""

    def __init__(
        self,
        clusters: Optional[Sequence[QuestionCluster]] = None,
        good_threshold: Optional[int] = None,
        moderate_threshold: Optional[int] = None,
    ):
        self.clusters: List[QuestionCluster] = list(clusters) if clusters is not None else get_clusters()
        self.good_threshold = good_threshold if good_threshold is not None else settings.GOOD_THRESHOLD
        self.moderate_threshold = (
            moderate_threshold if moderate_threshold is not None else settings.MODERATE_THRESHOLD
        )

    def calculate(self, answers: Iterable[AnswerInput]) -> AssessmentScore:
        """
        Args:
            answers: Selected options, as Answer models or dicts with
                     questionId/question_id and value. Later answers to the
                     same question replace earlier ones.

        Returns:
            AssessmentScore with scored answers in bank order.

        Raises:
            InvalidAnswerException: unknown question id or option value.
            IncompleteAssessmentException: any bank question left unanswered.
        """
        selected = self._index_answers(answers)

        missing = [
            q.id for c in self.clusters for q in c.questions if q.id not in selected
        ]
        if missing:
            raise IncompleteAssessmentException(missing)

        scored: List[ScoredAnswer] = []
        cluster_scores: List[ClusterScore] = []
        for cluster in self.clusters:
            cluster_total = 0
            for question in cluster.questions:
                value = selected[question.id]
                option = find_option(question, value)
                if option is None:
                    raise InvalidAnswerException(question.id, value)
                cluster_total += option.score
                scored.append(ScoredAnswer(question_id=question.id, value=value, score=option.score))

            max_score = cluster_max_score(cluster)
            cluster_scores.append(ClusterScore(
                cluster_id=cluster.id,
                cluster_title=cluster.title,
                score=cluster_total,
                max_score=max_score,
                percentage=percentage(cluster_total, max_score),
            ))

        total = sum(c.score for c in cluster_scores)
        max_total = sum(c.max_score for c in cluster_scores)
        overall = percentage(total, max_total)

        logger.info(
            "assessment_scored",
            total_score=total,
            max_total_score=max_total,
            overall_percentage=overall,
            cluster_percentages={c.cluster_id: c.percentage for c in cluster_scores},
        )

        return AssessmentScore(
            answers=scored,
            cluster_scores=cluster_scores,
            total_score=total,
            max_total_score=max_total,
            overall_percentage=overall,
        )

    def rating(self, pct: int) -> MaturityRating:
        if pct >= self.good_threshold:
            return MaturityRating.GOOD
        if pct >= self.moderate_threshold:
            return MaturityRating.MODERATE
        return MaturityRating.NEEDS_IMPROVEMENT

    def category_label(self, pct: int) -> str:
        """Short label used in category breakdowns ("Low" for the bottom band)."""
        rating = self.rating(pct)
        return "Low" if rating is MaturityRating.NEEDS_IMPROVEMENT else rating.value

    def _index_answers(self, answers: Iterable[AnswerInput]) -> Dict[str, str]:
        bank_ids = {q.id for c in self.clusters for q in c.questions}
        selected: Dict[str, str] = {}
        for raw in answers:
            answer = raw if isinstance(raw, Answer) else Answer.model_validate(raw)
            if answer.question_id not in bank_ids:
                raise InvalidAnswerException(answer.question_id, answer.value)
            selected[answer.question_id] = answer.value
        return selected

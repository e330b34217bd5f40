# tests/test_maturity_calculator.py
"""
MaturityCalculator Tests

Cluster arithmetic, half-up rounding, rating bands and answer validation.
"""

import pytest

from app.core.exceptions import IncompleteAssessmentException, InvalidAnswerException
from app.models.assessment import Answer
from app.models.enumerations import MaturityRating
from app.models.questionnaire import AnswerOption, Question, QuestionCluster
from app.scoring.maturity_calculator import MaturityCalculator
from app.scoring.questions import all_question_ids


def _replace(answers, question_id, value):
    return [
        {**a, "value": value} if a["questionId"] == question_id else a
        for a in answers
    ]


def _tiny_bank():
    options = [
        AnswerOption(value="yes", label="Yes", score=4),
        AnswerOption(value="some", label="Partly", score=1),
        AnswerOption(value="no", label="No", score=0),
    ]
    return [
        QuestionCluster(
            id="tiny",
            title="Tiny",
            description="Two questions",
            questions=[
                Question(id="t-1", text="First?", options=options),
                Question(id="t-2", text="Second?", options=options),
            ],
        ),
    ]


class TestCalculate:

    def test_all_best_answers_score_100(self, calculator, full_answers):
        result = calculator.calculate(full_answers)
        assert result.total_score == 100
        assert result.max_total_score == 100
        assert result.overall_percentage == 100
        assert all(cs.percentage == 100 for cs in result.cluster_scores)

    def test_all_worst_answers_score_0(self, calculator, worst_answers):
        result = calculator.calculate(worst_answers)
        assert result.total_score == 0
        assert result.overall_percentage == 0
        assert all(cs.percentage == 0 for cs in result.cluster_scores)

    def test_cluster_max_is_question_count_times_four(self, calculator, full_answers):
        result = calculator.calculate(full_answers)
        by_id = {cs.cluster_id: cs for cs in result.cluster_scores}
        assert by_id["access-control"].max_score == 16
        assert by_id["information-security-policy"].max_score == 12
        assert len(result.cluster_scores) == 8

    def test_partial_cluster_percentage(self, calculator, full_answers):
        answers = _replace(full_answers, "policy-1", "partially-implemented")
        result = calculator.calculate(answers)
        policy = result.cluster_scores[0]
        assert policy.cluster_id == "information-security-policy"
        assert policy.score == 10
        assert policy.percentage == 83  # 10 / 12 = 83.33
        assert result.total_score == 98
        assert result.overall_percentage == 98

    def test_half_percent_rounds_up(self):
        calc = MaturityCalculator(clusters=_tiny_bank(), good_threshold=75, moderate_threshold=50)
        result = calc.calculate([
            {"questionId": "t-1", "value": "yes"},
            {"questionId": "t-2", "value": "some"},
        ])
        assert result.cluster_scores[0].score == 5
        assert result.cluster_scores[0].percentage == 63  # 62.5
        assert result.overall_percentage == 63

    def test_client_score_is_ignored(self, calculator, worst_answers):
        answers = [{**a, "score": 4} for a in worst_answers]
        result = calculator.calculate(answers)
        assert result.total_score == 0

    def test_accepts_answer_models(self, calculator, full_answers):
        models = [Answer.model_validate(a) for a in full_answers]
        assert calculator.calculate(models).overall_percentage == 100

    def test_later_answer_replaces_earlier(self, calculator, full_answers):
        answers = full_answers + [{"questionId": "policy-1", "value": "not-implemented"}]
        result = calculator.calculate(answers)
        assert result.cluster_scores[0].score == 8

    def test_scored_answers_in_bank_order(self, calculator, full_answers):
        result = calculator.calculate(list(reversed(full_answers)))
        assert [a.question_id for a in result.answers] == all_question_ids()


class TestValidation:

    def test_missing_answers_listed_in_bank_order(self, calculator, full_answers):
        answers = [a for a in full_answers if a["questionId"] not in ("crypto-3", "policy-2")]
        with pytest.raises(IncompleteAssessmentException) as exc:
            calculator.calculate(answers)
        assert exc.value.missing_question_ids == ["policy-2", "crypto-3"]

    def test_empty_answers_incomplete(self, calculator):
        with pytest.raises(IncompleteAssessmentException) as exc:
            calculator.calculate([])
        assert len(exc.value.missing_question_ids) == 25

    def test_unknown_question_rejected(self, calculator, full_answers):
        with pytest.raises(InvalidAnswerException) as exc:
            calculator.calculate(full_answers + [{"questionId": "bogus-1", "value": "yes"}])
        assert exc.value.question_id == "bogus-1"

    def test_unknown_option_rejected(self, calculator, full_answers):
        with pytest.raises(InvalidAnswerException) as exc:
            calculator.calculate(_replace(full_answers, "bc-2", "maybe"))
        assert exc.value.question_id == "bc-2"
        assert exc.value.value == "maybe"


class TestRatings:

    @pytest.mark.parametrize("pct,expected", [
        (100, MaturityRating.GOOD),
        (75, MaturityRating.GOOD),
        (74, MaturityRating.MODERATE),
        (50, MaturityRating.MODERATE),
        (49, MaturityRating.NEEDS_IMPROVEMENT),
        (0, MaturityRating.NEEDS_IMPROVEMENT),
    ])
    def test_rating_bands(self, calculator, pct, expected):
        assert calculator.rating(pct) is expected

    def test_category_label_uses_low_for_bottom_band(self, calculator):
        assert calculator.category_label(80) == "Good"
        assert calculator.category_label(60) == "Moderate"
        assert calculator.category_label(10) == "Low"

    def test_custom_thresholds(self):
        calc = MaturityCalculator(good_threshold=90, moderate_threshold=60)
        assert calc.rating(85) is MaturityRating.MODERATE
        assert calc.rating(59) is MaturityRating.NEEDS_IMPROVEMENT

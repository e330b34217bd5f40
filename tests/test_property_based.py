# tests/test_property_based.py
"""
Property-Based Tests - Maturity scoring

Hypothesis tests over random (complete) answer sets and raw score pairs.
"""

from hypothesis import given, settings
from hypothesis import strategies as st

from app.models.enumerations import MaturityRating
from app.scoring.maturity_calculator import MaturityCalculator
from app.scoring.questions import get_clusters
from app.scoring.utils import percentage

CALC = MaturityCalculator(good_threshold=75, moderate_threshold=50)
QUESTIONS = [q for c in get_clusters() for q in c.questions]


@st.composite
def answer_sets(draw):
    """One randomly chosen option per bank question."""
    return [
        {"questionId": q.id, "value": draw(st.sampled_from(q.options)).value}
        for q in QUESTIONS
    ]


class TestScoringProperties:

    @given(answers=answer_sets())
    @settings(max_examples=200)
    def test_percentages_bounded(self, answers):
        result = CALC.calculate(answers)
        assert 0 <= result.overall_percentage <= 100
        for cs in result.cluster_scores:
            assert 0 <= cs.percentage <= 100
            assert 0 <= cs.score <= cs.max_score

    @given(answers=answer_sets())
    @settings(max_examples=200)
    def test_totals_equal_sums(self, answers):
        result = CALC.calculate(answers)
        assert result.total_score == sum(cs.score for cs in result.cluster_scores)
        assert result.max_total_score == sum(cs.max_score for cs in result.cluster_scores)
        assert result.total_score == sum(a.score for a in result.answers)

    @given(answers=answer_sets())
    @settings(max_examples=200)
    def test_overall_matches_formula(self, answers):
        result = CALC.calculate(answers)
        assert result.overall_percentage == percentage(result.total_score, result.max_total_score)

    @given(answers=answer_sets())
    @settings(max_examples=100)
    def test_answer_order_irrelevant(self, answers):
        assert CALC.calculate(answers) == CALC.calculate(list(reversed(answers)))


class TestPercentageProperties:

    @given(max_score=st.integers(min_value=1, max_value=1000), data=st.data())
    @settings(max_examples=300)
    def test_percentage_within_half_point(self, max_score, data):
        score = data.draw(st.integers(min_value=0, max_value=max_score))
        exact = score * 100 / max_score
        assert abs(percentage(score, max_score) - exact) <= 0.5

    @given(max_score=st.integers(min_value=1, max_value=1000), data=st.data())
    @settings(max_examples=300)
    def test_percentage_monotonic(self, max_score, data):
        a = data.draw(st.integers(min_value=0, max_value=max_score))
        b = data.draw(st.integers(min_value=a, max_value=max_score))
        assert percentage(a, max_score) <= percentage(b, max_score)

    @given(pct=st.integers(min_value=0, max_value=100))
    def test_rating_monotonic(self, pct):
        order = [MaturityRating.NEEDS_IMPROVEMENT, MaturityRating.MODERATE, MaturityRating.GOOD]
        if pct < 100:
            assert order.index(CALC.rating(pct)) <= order.index(CALC.rating(pct + 1))

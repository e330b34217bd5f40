"""
Dashboard Service Tests - search, sort and rating counts
"""

from app.models.enumerations import SortField, SortOrder
from app.services.dashboard_service import browse, filter_assessments, sort_assessments, summarize


class TestFilter:

    def test_empty_query_returns_everything(self, make_record):
        records = [make_record("A"), make_record("B")]
        assert filter_assessments(records, None) == records
        assert filter_assessments(records, "   ") == records

    def test_case_insensitive_across_fields(self, make_record):
        acme = make_record("Acme Corp", name="Jo", email="jo@acme.io", location="Oslo")
        beta = make_record("Beta LLC", name="Sam", email="sam@beta.io", location="Paris")
        records = [acme, beta]

        assert filter_assessments(records, "ACME") == [acme]
        assert filter_assessments(records, "sam") == [beta]
        assert filter_assessments(records, "@beta.") == [beta]
        assert filter_assessments(records, "oslo") == [acme]
        assert filter_assessments(records, "zzz") == []


class TestSort:

    def test_default_is_newest_first(self, make_record):
        old, new = make_record("Old", days=0), make_record("New", days=5)
        assert sort_assessments([old, new]) == [new, old]

    def test_score_ascending(self, make_record):
        low, high = make_record("L", pct=20), make_record("H", pct=90)
        assert sort_assessments([high, low], SortField.SCORE, SortOrder.ASC) == [low, high]

    def test_company_ignores_case(self, make_record):
        b, a = make_record("beta"), make_record("Alpha")
        assert sort_assessments([b, a], SortField.COMPANY, SortOrder.ASC) == [a, b]
        assert sort_assessments([b, a], SortField.COMPANY, SortOrder.DESC) == [b, a]

    def test_ties_keep_input_order(self, make_record):
        first, second = make_record("X", pct=50), make_record("Y", pct=50)
        assert sort_assessments([first, second], SortField.SCORE, SortOrder.ASC) == [first, second]
        assert sort_assessments([first, second], SortField.SCORE, SortOrder.DESC) == [first, second]


class TestSummary:

    def test_counts_per_band(self, calculator, make_record):
        records = [make_record(pct=p) for p in (100, 75, 74, 50, 49, 0)]
        summary = summarize(records, calculator)
        assert summary.total == 6
        assert summary.good == 2
        assert summary.moderate == 2
        assert summary.needs_improvement == 2

    def test_empty(self, calculator):
        summary = summarize([], calculator)
        assert summary.total == summary.good == summary.moderate == summary.needs_improvement == 0

    def test_browse_summarizes_filtered_set(self, calculator, make_record):
        records = [make_record("Acme", pct=90), make_record("Acme Two", pct=30), make_record("Other", pct=60)]
        rows, summary = browse(records, "acme", SortField.SCORE, SortOrder.DESC, calculator)
        assert [r.company_name for r in rows] == ["Acme", "Acme Two"]
        assert summary.total == 2
        assert summary.good == 1
        assert summary.needs_improvement == 1
        assert summary.moderate == 0

"""
Dashboard Service - ISO 27001 Risk Assessment
app/services/dashboard_service.py

Search, sort and rating counts over stored assessments. Everything is a
linear pass over the in-memory list.
"""

from typing import List, Optional, Sequence, Tuple

from app.models.assessment import AssessmentRecord, AssessmentSummary
from app.models.enumerations import MaturityRating, SortField, SortOrder
from app.scoring.maturity_calculator import MaturityCalculator

_SEARCH_FIELDS = ("user_name", "user_email", "company_name", "location")


def filter_assessments(
    records: Sequence[AssessmentRecord],
    query: Optional[str] = None,
) -> List[AssessmentRecord]:
    """Case-insensitive substring match on name, email, company and location."""
    needle = (query or "").strip().lower()
    if not needle:
        return list(records)
    return [
        r for r in records
        if any(needle in (getattr(r, f) or "").lower() for f in _SEARCH_FIELDS)
    ]


def _sort_key(sort_by: SortField):
    if sort_by == SortField.SCORE:
        return lambda r: r.overall_percentage
    if sort_by == SortField.COMPANY:
        return lambda r: r.company_name.casefold()
    return lambda r: r.submitted_at


def sort_assessments(
    records: Sequence[AssessmentRecord],
    sort_by: SortField = SortField.DATE,
    order: SortOrder = SortOrder.DESC,
) -> List[AssessmentRecord]:
    """Stable sort; ties keep submission order in either direction."""
    return sorted(records, key=_sort_key(sort_by), reverse=(order == SortOrder.DESC))


def summarize(
    records: Sequence[AssessmentRecord],
    calculator: Optional[MaturityCalculator] = None,
) -> AssessmentSummary:
    calculator = calculator or MaturityCalculator()
    summary = AssessmentSummary(total=len(records))
    for r in records:
        rating = calculator.rating(r.overall_percentage)
        if rating is MaturityRating.GOOD:
            summary.good += 1
        elif rating is MaturityRating.MODERATE:
            summary.moderate += 1
        else:
            summary.needs_improvement += 1
    return summary


def browse(
    records: Sequence[AssessmentRecord],
    query: Optional[str] = None,
    sort_by: SortField = SortField.DATE,
    order: SortOrder = SortOrder.DESC,
    calculator: Optional[MaturityCalculator] = None,
) -> Tuple[List[AssessmentRecord], AssessmentSummary]:
    """Filter, then sort, then count ratings over the filtered set."""
    filtered = filter_assessments(records, query)
    ordered = sort_assessments(filtered, sort_by, order)
    return ordered, summarize(ordered, calculator)

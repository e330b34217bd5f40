"""
Report Generator Service
app/services/report_generator.py

Generates markdown reports for a single assessment and for the whole set of
stored assessments.
"""

import logging
from typing import List, Optional, Sequence
from datetime import datetime, timezone
from decimal import Decimal

from app.models.assessment import AssessmentRecord
from app.scoring.maturity_calculator import MaturityCalculator
from app.scoring.recommendations import (
    ALL_STRONG_MESSAGE,
    GENERAL_RECOMMENDATIONS,
    all_categories_strong,
    improvement_areas,
)
from app.scoring.utils import round_half_up

logger = logging.getLogger(__name__)


# =====================================================================
# Single Assessment Report
# =====================================================================

def generate_assessment_report(
    record: AssessmentRecord,
    calculator: Optional[MaturityCalculator] = None,
) -> str:
    """Generate markdown report for a single assessment."""

    calculator = calculator or MaturityCalculator()
    now = datetime.now(timezone.utc).strftime("%Y-%m-%d")
    rating = calculator.rating(record.overall_percentage)

    lines = []
    lines.append(f"# ISO 27001 Risk Assessment Report")
    lines.append(f"")
    lines.append(f"> **{record.company_name}** | {record.location} | Generated: {now}")
    lines.append(f"")
    lines.append(f"---")
    lines.append(f"")

    # ── Assessment Information ──
    lines.append(f"## Assessment Information")
    lines.append(f"")
    lines.append(f"| Field | Value |")
    lines.append(f"|:---|:---|")
    lines.append(f"| Name | {_cell(record.user_name)} |")
    lines.append(f"| Email | {_cell(record.user_email)} |")
    lines.append(f"| Company | {_cell(record.company_name)} |")
    lines.append(f"| Location | {_cell(record.location)} |")
    lines.append(f"| Submission Date | {_date(record.submitted_at)} |")
    lines.append(f"")

    # ── Overall Score ──
    lines.append(f"## Overall Assessment Score")
    lines.append(f"")
    lines.append(
        f"**{record.overall_percentage}%** "
        f"({record.total_score}/{record.max_total_score} points)"
    )
    lines.append(f"")
    lines.append(f"Status: **{rating.value}**")
    lines.append(f"")

    # ── Category Breakdown ──
    lines.append(f"## Category Breakdown")
    lines.append(f"")
    lines.append(f"| Category | Score | Percentage | Rating |")
    lines.append(f"|:---|---:|---:|:---|")
    for cs in record.cluster_scores:
        lines.append(
            f"| {cs.cluster_title} | {cs.score}/{cs.max_score} "
            f"| {cs.percentage}% | {calculator.category_label(cs.percentage)} |"
        )
    lines.append(f"")

    # ── Areas for Improvement ──
    lines.append(f"## Areas for Improvement")
    lines.append(f"")
    if all_categories_strong(record.cluster_scores, calculator.good_threshold):
        lines.append(ALL_STRONG_MESSAGE)
    else:
        for area in improvement_areas(record.cluster_scores, calculator.good_threshold):
            lines.append(f"- **{area.cluster_title}** ({area.percentage}%): {area.description}")
    lines.append(f"")

    # ── Recommendations ──
    lines.append(f"## Recommendations")
    lines.append(f"")
    for rec in GENERAL_RECOMMENDATIONS:
        lines.append(f"- {rec}")
    lines.append(f"")

    return "\n".join(lines)


# =====================================================================
# Portfolio Summary
# =====================================================================

def generate_portfolio_summary(
    records: Sequence[AssessmentRecord],
    calculator: Optional[MaturityCalculator] = None,
) -> str:
    """Generate markdown comparison across all stored assessments."""

    calculator = calculator or MaturityCalculator()
    now = datetime.now(timezone.utc).strftime("%Y-%m-%d")

    lines = []
    lines.append(f"# ISO 27001 Assessment Portfolio Summary")
    lines.append(f"")
    lines.append(f"> Generated: {now} | Assessments: {len(records)}")
    lines.append(f"")
    lines.append(f"---")
    lines.append(f"")

    if not records:
        lines.append(f"_No assessments have been submitted yet._")
        lines.append(f"")
        return "\n".join(lines)

    # ── Rankings ──
    lines.append(f"## Rankings (by Overall Score)")
    lines.append(f"")
    lines.append(f"| Rank | Company | Location | Submitted | Score | Status |")
    lines.append(f"|---:|:---|:---|:---|---:|:---|")

    ranked = sorted(records, key=lambda r: r.overall_percentage, reverse=True)
    for i, r in enumerate(ranked, 1):
        lines.append(
            f"| {i} | **{_cell(r.company_name)}** | {_cell(r.location)} | {_date(r.submitted_at)} "
            f"| {r.overall_percentage}% | {calculator.rating(r.overall_percentage).value} |"
        )
    lines.append(f"")

    # ── Category Averages ──
    lines.append(f"## Category Averages")
    lines.append(f"")
    lines.append(f"| Category | Average | Leader | Laggard |")
    lines.append(f"|:---|---:|:---|:---|")

    cluster_order: List[str] = []
    by_cluster = {}
    for r in records:
        for cs in r.cluster_scores:
            if cs.cluster_id not in by_cluster:
                by_cluster[cs.cluster_id] = []
                cluster_order.append(cs.cluster_id)
            by_cluster[cs.cluster_id].append((r.company_name, cs))

    for cluster_id in cluster_order:
        entries = by_cluster[cluster_id]
        avg = round_half_up(Decimal(sum(cs.percentage for _, cs in entries)) / Decimal(len(entries)))
        entries.sort(key=lambda x: x[1].percentage, reverse=True)
        leader, laggard = entries[0], entries[-1]
        lines.append(
            f"| {leader[1].cluster_title} | {avg}% "
            f"| {_cell(leader[0])} ({leader[1].percentage}%) "
            f"| {_cell(laggard[0])} ({laggard[1].percentage}%) |"
        )
    lines.append(f"")

    return "\n".join(lines)


# =====================================================================
# Helpers
# =====================================================================

def _cell(val: Optional[str]) -> str:
    """Escape pipes so free text can't break a table row."""
    if not val:
        return "—"
    return str(val).replace("|", "\\|")


def _date(val: datetime) -> str:
    return val.strftime("%Y-%m-%d")

"""
PDF Report Service
app/services/report_pdf.py

Renders a stored assessment as a downloadable PDF with reportlab.
"""

import logging
import re
from datetime import datetime, timezone
from io import BytesIO
from typing import List, Optional
from xml.sax.saxutils import escape

from reportlab.lib import colors
from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import ParagraphStyle, getSampleStyleSheet
from reportlab.lib.units import cm
from reportlab.platypus import ListFlowable, ListItem, Paragraph, SimpleDocTemplate, Spacer

from app.models.assessment import AssessmentRecord
from app.models.enumerations import MaturityRating
from app.scoring.maturity_calculator import MaturityCalculator
from app.scoring.recommendations import (
    ALL_STRONG_MESSAGE,
    GENERAL_RECOMMENDATIONS,
    all_categories_strong,
    improvement_areas,
)

logger = logging.getLogger(__name__)

REPORT_TITLE = "ISO 27001 Risk Assessment Report"

RATING_COLORS = {
    MaturityRating.GOOD: "#16a34a",
    MaturityRating.MODERATE: "#ca8a04",
    MaturityRating.NEEDS_IMPROVEMENT: "#dc2626",
}

LABEL_COLORS = {
    MaturityRating.GOOD.value: RATING_COLORS[MaturityRating.GOOD],
    MaturityRating.MODERATE.value: RATING_COLORS[MaturityRating.MODERATE],
    "Low": RATING_COLORS[MaturityRating.NEEDS_IMPROVEMENT],
}


def report_filename(record: AssessmentRecord, extension: str = "pdf") -> str:
    """ISO27001-Assessment-Report-<Company-Name>.<extension>"""
    company = re.sub(r"\s+", "-", record.company_name.strip())
    return f"ISO27001-Assessment-Report-{company}.{extension}"


def _styles():
    styles = getSampleStyleSheet()
    return {
        "title": ParagraphStyle("ReportTitle", parent=styles["Title"], fontName="Helvetica-Bold", fontSize=20, spaceAfter=6),
        "h2": ParagraphStyle("ReportH2", parent=styles["Heading2"], fontName="Helvetica-Bold", fontSize=14,
                             spaceBefore=14, spaceAfter=8, textColor=colors.HexColor("#1a365d")),
        "normal": ParagraphStyle("ReportNormal", parent=styles["Normal"], fontName="Helvetica", fontSize=10, leading=14),
        "score": ParagraphStyle("ReportScore", parent=styles["Normal"], fontName="Helvetica-Bold", fontSize=12, leading=16),
        "small": ParagraphStyle("ReportSmall", parent=styles["Normal"], fontName="Helvetica", fontSize=9,
                                textColor=colors.HexColor("#4a5568")),
    }


def build_report_story(
    record: AssessmentRecord,
    calculator: Optional[MaturityCalculator] = None,
    generated_at: Optional[datetime] = None,
) -> List:
    """Flowables for the report, top to bottom."""
    calculator = calculator or MaturityCalculator()
    generated_at = generated_at or datetime.now(timezone.utc)
    st = _styles()
    rating = calculator.rating(record.overall_percentage)

    story: List = []

    # Header
    story.append(Paragraph(REPORT_TITLE, st["title"]))
    story.append(Paragraph(f"Generated on: {generated_at.strftime('%Y-%m-%d')}", st["small"]))

    # Assessment Information
    story.append(Paragraph("Assessment Information", st["h2"]))
    for label, value in (
        ("Name", record.user_name),
        ("Email", record.user_email),
        ("Company", record.company_name),
        ("Location", record.location),
        ("Submission Date", record.submitted_at.strftime("%Y-%m-%d")),
    ):
        story.append(Paragraph(f"<b>{label}:</b> {escape(value)}", st["normal"]))

    # Overall Score
    story.append(Paragraph("Overall Assessment Score", st["h2"]))
    story.append(Paragraph(
        f"{record.overall_percentage}% ({record.total_score}/{record.max_total_score} points)",
        st["score"],
    ))
    story.append(Paragraph(
        f'Status: <font color="{RATING_COLORS[rating]}">{rating.value}</font>',
        st["normal"],
    ))

    # Category Breakdown
    story.append(Paragraph("Category Breakdown", st["h2"]))
    for cs in record.cluster_scores:
        label = calculator.category_label(cs.percentage)
        story.append(Paragraph(
            f"<b>{escape(cs.cluster_title)}: {cs.percentage}%</b> "
            f'<font color="{LABEL_COLORS.get(label, "#4a5568")}">({label})</font>',
            st["normal"],
        ))
        story.append(Paragraph(f"Score: {cs.score}/{cs.max_score}", st["small"]))
        story.append(Spacer(1, 6))

    # Areas for Improvement
    story.append(Paragraph("Areas for Improvement", st["h2"]))
    if all_categories_strong(record.cluster_scores, calculator.good_threshold):
        story.append(Paragraph(ALL_STRONG_MESSAGE, st["normal"]))
    else:
        for area in improvement_areas(record.cluster_scores, calculator.good_threshold):
            story.append(Paragraph(
                f"<b>{escape(area.cluster_title)}</b> ({area.percentage}%): {escape(area.description)}",
                st["normal"],
            ))
            story.append(Spacer(1, 4))

    # Recommendations
    story.append(Paragraph("Recommendations", st["h2"]))
    story.append(ListFlowable(
        [ListItem(Paragraph(escape(rec), st["normal"])) for rec in GENERAL_RECOMMENDATIONS],
        bulletType="bullet",
        start="•",
    ))

    return story


def build_assessment_pdf(
    record: AssessmentRecord,
    calculator: Optional[MaturityCalculator] = None,
    generated_at: Optional[datetime] = None,
) -> bytes:
    """Build the PDF report and return its bytes."""
    story = build_report_story(record, calculator, generated_at)

    buffer = BytesIO()
    doc = SimpleDocTemplate(
        buffer,
        pagesize=A4,
        rightMargin=2 * cm,
        leftMargin=2 * cm,
        topMargin=2 * cm,
        bottomMargin=2 * cm,
        title=REPORT_TITLE,
        author=record.company_name,
    )
    doc.build(story)

    pdf = buffer.getvalue()
    logger.info(f"Built PDF report for assessment {record.id} ({len(pdf)} bytes)")
    return pdf

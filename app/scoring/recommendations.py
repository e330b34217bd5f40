"""
Recommendations
app/scoring/recommendations.py

Picks the clusters that need attention and carries the fixed list of
general recommendations printed in exported reports.
"""

from typing import List, Optional, Sequence

from app.config import settings
from app.models.assessment import ClusterScore, ImprovementArea
from app.scoring.questions import get_cluster

FALLBACK_DESCRIPTION = (
    "Focus on improving controls in this area to enhance your security posture."
)

ALL_STRONG_MESSAGE = (
    "Great job! All categories are performing well. "
    "Continue to maintain and improve your security controls."
)

GENERAL_RECOMMENDATIONS: List[str] = [
    "Review and update information security policies regularly",
    "Implement multi-factor authentication for all users",
    "Conduct regular security awareness training",
    "Perform periodic access rights reviews",
    "Establish incident response procedures",
    "Test business continuity and disaster recovery plans",
    "Maintain an up-to-date asset inventory",
    "Implement encryption for sensitive data",
]


def improvement_areas(
    cluster_scores: Sequence[ClusterScore],
    threshold: Optional[int] = None,
) -> List[ImprovementArea]:
    """Clusters scoring below the good threshold, in their original order."""
    limit = settings.GOOD_THRESHOLD if threshold is None else threshold
    areas = []
    for cs in cluster_scores:
        if cs.percentage >= limit:
            continue
        cluster = get_cluster(cs.cluster_id)
        areas.append(ImprovementArea(
            cluster_id=cs.cluster_id,
            cluster_title=cs.cluster_title,
            percentage=cs.percentage,
            description=cluster.description if cluster else FALLBACK_DESCRIPTION,
        ))
    return areas


def all_categories_strong(
    cluster_scores: Sequence[ClusterScore],
    threshold: Optional[int] = None,
) -> bool:
    limit = settings.GOOD_THRESHOLD if threshold is None else threshold
    return all(cs.percentage >= limit for cs in cluster_scores)

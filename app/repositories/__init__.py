"""
Repositories Package - ISO 27001 Risk Assessment
app/repositories/__init__.py

Data access layer over the Redis key-value store.
"""

from app.repositories.base import BaseRepository
from app.repositories.assessment_repository import AssessmentRepository

__all__ = [
    "BaseRepository",
    "AssessmentRepository",
]

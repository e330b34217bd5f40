"""
Dependencies - ISO 27001 Risk Assessment
app/core/dependencies.py

FastAPI dependency injection for repositories and services.
"""

from functools import lru_cache

from app.repositories.assessment_repository import AssessmentRepository
from app.scoring.maturity_calculator import MaturityCalculator
from app.services.auth_service import AuthService


@lru_cache()
def get_assessment_repository() -> AssessmentRepository:
    """Get cached AssessmentRepository instance."""
    return AssessmentRepository()


@lru_cache()
def get_auth_service() -> AuthService:
    """Get cached AuthService instance."""
    return AuthService()


@lru_cache()
def get_maturity_calculator() -> MaturityCalculator:
    """Get cached MaturityCalculator instance."""
    return MaturityCalculator()

"""
Core Package - ISO 27001 Risk Assessment
app/core/__init__.py

Core infrastructure: dependencies, exceptions, logging, security.
Dependency providers live in app.core.dependencies and are imported from
there directly.
"""

from app.core.exceptions import (
    AuthenticationException,
    DatabaseConnectionException,
    EntityNotFoundException,
    IdentityProviderException,
    IncompleteAssessmentException,
    InvalidAnswerException,
    RepositoryException,
    ScoringException,
)

__all__ = [
    "AuthenticationException",
    "DatabaseConnectionException",
    "EntityNotFoundException",
    "IdentityProviderException",
    "IncompleteAssessmentException",
    "InvalidAnswerException",
    "RepositoryException",
    "ScoringException",
]

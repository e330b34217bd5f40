"""
Custom Exceptions - ISO 27001 Risk Assessment
app/core/exceptions.py

Custom exception classes for storage, identity and scoring operations.
"""

from typing import List


class RepositoryException(Exception):
    """Base exception for repository operations."""

    pass


class EntityNotFoundException(RepositoryException):
    """Entity not found in the key-value store."""

    def __init__(self, entity_type: str, entity_id: str):
        self.entity_type = entity_type
        self.entity_id = entity_id
        super().__init__(f"{entity_type} with ID {entity_id} not found")


class DatabaseConnectionException(RepositoryException):
    """Key-value store connection failure."""

    def __init__(self, message: str = "Key-value store connection failed"):
        self.message = message
        super().__init__(message)


class AuthenticationException(Exception):
    """Missing, malformed or rejected bearer token."""

    def __init__(self, message: str = "Unauthorized"):
        self.message = message
        super().__init__(message)


class IdentityProviderException(Exception):
    """Identity provider refused a sign-up or sign-in."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class ScoringException(Exception):
    """Base exception for questionnaire scoring."""

    pass


class IncompleteAssessmentException(ScoringException):
    """One or more questions were left unanswered."""

    def __init__(self, missing_question_ids: List[str]):
        self.missing_question_ids = list(missing_question_ids)
        super().__init__(
            f"{len(self.missing_question_ids)} question(s) unanswered: "
            + ", ".join(self.missing_question_ids)
        )


class InvalidAnswerException(ScoringException):
    """Answer references an unknown question or option."""

    def __init__(self, question_id: str, value: str):
        self.question_id = question_id
        self.value = value
        super().__init__(f"Invalid answer '{value}' for question '{question_id}'")

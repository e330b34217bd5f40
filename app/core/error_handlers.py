"""
Exception Handlers - ISO 27001 Risk Assessment
app/core/error_handlers.py

Maps request validation failures and domain exceptions onto JSON error
bodies: {"error", "error_code", "details", "timestamp"}.
"""

import logging
from datetime import datetime, timezone
from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import HTTPException, RequestValidationError
from fastapi.responses import JSONResponse

from app.core.exceptions import (
    AuthenticationException,
    DatabaseConnectionException,
    EntityNotFoundException,
    IdentityProviderException,
    IncompleteAssessmentException,
    InvalidAnswerException,
    RepositoryException,
)
from app.models.assessment import ErrorResponse

logger = logging.getLogger(__name__)


FIELD_MESSAGES = {
    "userInfo": {
        "missing": "User information is required",
    },
    "userInfo.email": {
        "missing": "Email is required",
        "value_error": "Email must be a valid email address",
    },
    "userInfo.name": {
        "missing": "Name is required",
        "string_too_short": "Name must not be empty",
        "value_error": "Name must not be blank",
    },
    "userInfo.companyName": {
        "missing": "Company name is required",
        "string_too_short": "Company name must not be empty",
        "value_error": "Company name must not be blank",
    },
    "userInfo.location": {
        "missing": "Location is required",
        "string_too_short": "Location must not be empty",
        "value_error": "Location must not be blank",
    },
    "answers": {
        "missing": "Answers are required",
        "too_short": "At least one answer is required",
        "list_type": "Answers must be a list",
    },
    "sort_by": {
        "enum": "sort_by must be one of: date, score, company",
    },
    "order": {
        "enum": "order must be one of: asc, desc",
    },
    "email": {
        "value_error": "Email must be a valid email address",
    },
}

DEFAULT_MESSAGES = {
    "missing": "Field '{field}' is required",
    "string_too_short": "Field '{field}' is too short",
    "string_too_long": "Field '{field}' is too long",
    "less_than_equal": "Field '{field}' exceeds maximum allowed value",
    "greater_than_equal": "Field '{field}' is below minimum allowed value",
    "uuid_parsing": "Field '{field}' must be a valid UUID",
    "string_type": "Field '{field}' must be a string",
    "int_type": "Field '{field}' must be an integer",
    "int_parsing": "Field '{field}' must be a valid integer",
    "enum": "Field '{field}' has an invalid value",
    "value_error": "Field '{field}' has an invalid value",
    "extra_forbidden": "Unknown field '{field}' is not allowed",
}


def get_validation_message(field: str, error_type: str) -> str:
    if field in FIELD_MESSAGES:
        field_msgs = FIELD_MESSAGES[field]
        for key in field_msgs:
            if key in error_type:
                return field_msgs[key]

    for key, template in DEFAULT_MESSAGES.items():
        if key in error_type:
            return template.format(field=field)

    return f"Invalid value for field '{field}'"


def error_body(error_code: str, message: str, details: Optional[dict] = None) -> dict:
    return ErrorResponse(
        error=message,
        error_code=error_code,
        details=details,
        timestamp=datetime.now(timezone.utc),
    ).model_dump(mode="json")


def error_response(status_code: int, error_code: str, message: str, details: Optional[dict] = None) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=error_body(error_code, message, details))


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    errors = exc.errors()

    if not errors:
        return error_response(status.HTTP_422_UNPROCESSABLE_ENTITY, "VALIDATION_ERROR", "Request validation failed")

    err = errors[0]
    error_type = err.get("type", "")
    loc = err.get("loc", [])

    if "json_invalid" in error_type:
        return error_response(status.HTTP_400_BAD_REQUEST, "INVALID_REQUEST", "Malformed JSON request body")

    field = ".".join(str(l) for l in loc if l not in ("body", "path", "query"))
    message = get_validation_message(field, error_type)

    return error_response(
        status.HTTP_422_UNPROCESSABLE_ENTITY,
        "VALIDATION_ERROR",
        message,
        {"field": field, "type": error_type} if field else None,
    )


async def http_exception_handler(request: Request, exc: HTTPException):
    if isinstance(exc.detail, dict) and "error_code" in exc.detail:
        return JSONResponse(status_code=exc.status_code, content=exc.detail, headers=exc.headers)
    return JSONResponse(
        status_code=exc.status_code,
        content=error_body("HTTP_ERROR", str(exc.detail)),
        headers=exc.headers,
    )


async def incomplete_assessment_handler(request: Request, exc: IncompleteAssessmentException):
    return error_response(
        status.HTTP_400_BAD_REQUEST,
        "INCOMPLETE_ASSESSMENT",
        "Invalid assessment data",
        {"missing_questions": exc.missing_question_ids},
    )


async def invalid_answer_handler(request: Request, exc: InvalidAnswerException):
    return error_response(
        status.HTTP_400_BAD_REQUEST,
        "INVALID_ANSWER",
        "Invalid assessment data",
        {"question_id": exc.question_id, "value": exc.value},
    )


async def authentication_handler(request: Request, exc: AuthenticationException):
    return error_response(
        status.HTTP_401_UNAUTHORIZED,
        "UNAUTHORIZED",
        "Unauthorized",
    )


async def identity_provider_handler(request: Request, exc: IdentityProviderException):
    return error_response(status.HTTP_400_BAD_REQUEST, "IDENTITY_PROVIDER_ERROR", exc.message)


async def not_found_handler(request: Request, exc: EntityNotFoundException):
    return error_response(
        status.HTTP_404_NOT_FOUND,
        f"{exc.entity_type.upper()}_NOT_FOUND",
        f"{exc.entity_type.capitalize()} not found",
    )


async def repository_exception_handler(request: Request, exc: RepositoryException):
    logger.error(f"Storage failure on {request.method} {request.url.path}: {exc}")
    if isinstance(exc, DatabaseConnectionException):
        return error_response(status.HTTP_503_SERVICE_UNAVAILABLE, "STORAGE_UNAVAILABLE", "Storage unavailable")
    return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, "STORAGE_ERROR", "Storage error")


async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.error(f"Unhandled error on {request.method} {request.url.path}: {exc}", exc_info=exc)
    return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, "INTERNAL_SERVER_ERROR", "Unexpected server error")


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(HTTPException, http_exception_handler)
    app.add_exception_handler(IncompleteAssessmentException, incomplete_assessment_handler)
    app.add_exception_handler(InvalidAnswerException, invalid_answer_handler)
    app.add_exception_handler(AuthenticationException, authentication_handler)
    app.add_exception_handler(IdentityProviderException, identity_provider_handler)
    app.add_exception_handler(EntityNotFoundException, not_found_handler)
    app.add_exception_handler(RepositoryException, repository_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)

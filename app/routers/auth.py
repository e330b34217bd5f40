"""
Auth Router - ISO 27001 Risk Assessment
app/routers/auth.py

Account creation and password sign-in against Supabase Auth.
"""

import logging

from fastapi import APIRouter, Depends, status
from pydantic.alias_generators import to_camel

from app.core.dependencies import get_auth_service
from app.core.error_handlers import error_response
from app.models.assessment import ErrorResponse
from app.models.auth import LoginRequest, LoginResponse, SignupRequest, SignupResponse
from app.services.auth_service import AuthService

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Auth"])


@router.post(
    "/signup",
    response_model=SignupResponse,
    responses={
        400: {
            "model": ErrorResponse,
            "description": "Missing fields or rejected by the identity provider",
            "content": {
                "application/json": {
                    "example": {
                        "error": "All fields are required",
                        "error_code": "MISSING_FIELDS",
                        "details": {"missing": ["companyName"]},
                        "timestamp": "2026-01-28T12:00:00Z"
                    }
                }
            }
        },
    },
    summary="Create an account",
    description="Creates a confirmed user with name, company and location stored as user metadata.",
)
async def signup(
    payload: SignupRequest,
    auth_service: AuthService = Depends(get_auth_service),
):
    missing = payload.missing_fields()
    if missing:
        return error_response(
            status.HTTP_400_BAD_REQUEST,
            "MISSING_FIELDS",
            "All fields are required",
            {"missing": [to_camel(f) for f in missing]},
        )

    user = auth_service.sign_up(
        email=payload.email,
        password=payload.password,
        name=payload.name.strip(),
        company_name=payload.company_name.strip(),
        location=payload.location.strip(),
    )
    return SignupResponse(user=user)


@router.post(
    "/login",
    response_model=LoginResponse,
    responses={
        400: {"model": ErrorResponse, "description": "Invalid login credentials"},
    },
    summary="Sign in",
    description="Password sign-in. The returned access token is used as the Bearer token for the dashboard.",
)
async def login(
    payload: LoginRequest,
    auth_service: AuthService = Depends(get_auth_service),
) -> LoginResponse:
    return auth_service.sign_in(payload.email, payload.password)

"""Authentication API endpoints."""

import logging
from typing import Annotated, Any

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import JSONResponse
from pydantic import ValidationError
from sqlalchemy.orm import Session

from src.api.dependencies import AuthContext, get_auth_context
from src.database import get_db
from src.schemas.auth import AuthResponse, UserEmail, UserLogin, UserRegister
from src.services.auth import (
    EmailAlreadyRegisteredError,
    authenticate_user,
    get_user_by_email,
    register_user,
)
from src.services.tokens import issue_token, revoke_token

logger = logging.getLogger(__name__)

router = APIRouter(tags=["auth"])


def auth_response(
    status_code: int, *, success: bool, error_message: str = "", token: str = ""
) -> JSONResponse:
    """Build an auth envelope response."""
    body = AuthResponse(success=success, error_message=error_message, token=token)
    return JSONResponse(status_code=status_code, content=body.model_dump(by_alias=True))


def validation_failed_response() -> JSONResponse:
    """Generic registration validation failure."""
    return auth_response(
        status.HTTP_422_UNPROCESSABLE_ENTITY,
        success=False,
        error_message="Validation failed. Please try again.",
    )


def email_taken_response() -> JSONResponse:
    return auth_response(
        status.HTTP_409_CONFLICT,
        success=False,
        error_message="User already registered",
    )


def is_registered_email(db: Session, payload: Any) -> bool:
    """Check whether the payload carries a valid email that already has an account."""
    try:
        email = UserEmail.model_validate(payload).email
    except ValidationError:
        return False
    return get_user_by_email(db, email) is not None


@router.post(
    "/register",
    response_model=AuthResponse,
    status_code=status.HTTP_201_CREATED,
    openapi_extra={
        "requestBody": {
            "content": {"application/json": {"schema": UserRegister.model_json_schema()}},
            "required": True,
        }
    },
)
async def register(
    request: Request,
    db: Annotated[Session, Depends(get_db)],
):
    """Register a new user and return their first token.

    The body is validated here rather than by the framework so that failures
    come back in the auth envelope.
    """
    try:
        payload = await request.json()
    except ValueError:
        return validation_failed_response()

    try:
        user_data = UserRegister.model_validate(payload)
    except ValidationError:
        # A taken email outranks any other field error
        if is_registered_email(db, payload):
            return email_taken_response()
        return validation_failed_response()

    try:
        _, token = register_user(db, user_data.email, user_data.password)
    except EmailAlreadyRegisteredError:
        return email_taken_response()
    except Exception:
        db.rollback()
        logger.exception("Registration failed")
        return auth_response(
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            success=False,
            error_message="Registration failed. Please try again.",
        )

    return auth_response(status.HTTP_201_CREATED, success=True, token=token)


@router.post("/login", response_model=AuthResponse)
async def login(
    credentials: UserLogin,
    db: Annotated[Session, Depends(get_db)],
):
    """Login with email and password."""
    user = authenticate_user(db, credentials.email, credentials.password)

    if not user:
        logger.info("Rejected login attempt")
        return auth_response(
            status.HTTP_401_UNAUTHORIZED,
            success=False,
            error_message="Invalid credentials.",
        )

    token = issue_token(db, user)
    return auth_response(status.HTTP_200_OK, success=True, token=token)


@router.post("/logout", response_model=AuthResponse)
async def logout(
    context: Annotated[AuthContext | None, Depends(get_auth_context)],
    db: Annotated[Session, Depends(get_db)],
):
    """Revoke the token used to make this request."""
    if context is None:
        return auth_response(
            status.HTTP_401_UNAUTHORIZED,
            success=False,
            error_message="Invalid token or user not authenticated.",
        )

    revoke_token(db, context.token)
    return auth_response(status.HTTP_200_OK, success=True)

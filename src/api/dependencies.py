"""FastAPI dependencies for authentication."""

from dataclasses import dataclass
from typing import Annotated

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from src.database import get_db
from src.models.personal_access_token import PersonalAccessToken
from src.models.user import User
from src.services.tokens import resolve_token

security = HTTPBearer(auto_error=False)


@dataclass(frozen=True)
class AuthContext:
    """The user and token that authorized the current request."""

    user: User
    token: PersonalAccessToken


def get_auth_context(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
    db: Annotated[Session, Depends(get_db)],
) -> AuthContext | None:
    """Resolve the bearer token, if any, to an auth context.

    Returns None when the header is missing or the token is unknown or
    revoked; handlers decide how to reject anonymous requests.
    """
    if credentials is None:
        return None

    token = resolve_token(db, credentials.credentials)
    if token is None:
        return None

    return AuthContext(user=token.user, token=token)

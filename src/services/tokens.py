"""Opaque bearer token issuance, lookup and revocation."""

import hashlib
import hmac
import logging
import secrets
from datetime import UTC, datetime

from sqlalchemy.orm import Session

from src.models.personal_access_token import PersonalAccessToken
from src.models.user import User

logger = logging.getLogger(__name__)

DEFAULT_TOKEN_NAME = "auth_token"

# 20 random bytes -> 40 hex characters
TOKEN_SECRET_BYTES = 20


def hash_token_secret(secret: str) -> str:
    """Hash a token secret for storage and lookup."""
    return hashlib.sha256(secret.encode("utf-8")).hexdigest()


def issue_token(
    db: Session,
    user: User,
    name: str = DEFAULT_TOKEN_NAME,
    *,
    commit: bool = True,
) -> str:
    """Create a new active token for a user and return its plaintext form.

    The plaintext is ``"<token id>|<secret>"`` and is only available here;
    the database keeps the hash of the secret. With ``commit=False`` the token
    is flushed into the caller's transaction instead of committed.
    """
    secret = secrets.token_hex(TOKEN_SECRET_BYTES)
    token = PersonalAccessToken(
        user_id=user.id,
        name=name,
        token_hash=hash_token_secret(secret),
    )
    db.add(token)
    if commit:
        db.commit()
        db.refresh(token)
    else:
        db.flush()

    logger.info(f"Issued token {token.id} for user {user.id}")
    return f"{token.id}|{secret}"


def resolve_token(db: Session, plain_text: str | None) -> PersonalAccessToken | None:
    """Find the active token matching a plaintext bearer value.

    Accepts both ``"<id>|<secret>"`` and a bare secret. Returns None for
    malformed, unknown or revoked tokens.
    """
    if not plain_text:
        return None

    token_id, separator, secret = plain_text.partition("|")
    if separator:
        if not (token_id.isascii() and token_id.isdigit()) or len(token_id) > 18:
            return None
        token = db.get(PersonalAccessToken, int(token_id))
        if token is None or not hmac.compare_digest(
            token.token_hash, hash_token_secret(secret)
        ):
            return None
    else:
        token = (
            db.query(PersonalAccessToken)
            .filter(PersonalAccessToken.token_hash == hash_token_secret(plain_text))
            .first()
        )
        if token is None:
            return None

    token.last_used_at = datetime.now(UTC)
    db.commit()
    return token


def revoke_token(db: Session, token: PersonalAccessToken) -> None:
    """Delete a token so it can never authorize a request again."""
    token_id = token.id
    deleted = (
        db.query(PersonalAccessToken)
        .filter(PersonalAccessToken.id == token_id)
        .delete(synchronize_session="fetch")
    )
    db.commit()

    if deleted:
        logger.info(f"Revoked token {token_id}")

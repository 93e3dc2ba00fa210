"""Authentication service for password handling and user accounts."""

import logging

from passlib.context import CryptContext
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from src.models.user import User
from src.services.tokens import issue_token

logger = logging.getLogger(__name__)

# Password hashing context
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


class EmailAlreadyRegisteredError(Exception):
    """Raised when registering an email that already has an account."""


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a password against its hash."""
    return pwd_context.verify(plain_password, hashed_password)


def get_password_hash(password: str) -> str:
    """Hash a password."""
    return pwd_context.hash(password)


def get_user_by_email(db: Session, email: str) -> User | None:
    """Get a user by email."""
    return db.query(User).filter(User.email == email).first()


def authenticate_user(db: Session, email: str, password: str) -> User | None:
    """Authenticate a user by email and password.

    Unknown emails still pay for a hash verification so both failure modes
    take about the same time.
    """
    user = get_user_by_email(db, email)
    if not user:
        pwd_context.dummy_verify()
        return None
    if not verify_password(password, user.password_hash):
        return None
    return user


def register_user(db: Session, email: str, password: str) -> tuple[User, str]:
    """Create a user and their first token in a single transaction.

    Returns the user and the plaintext token. Raises
    EmailAlreadyRegisteredError if the email is taken, including when a
    concurrent registration wins the race on the unique index.
    """
    if get_user_by_email(db, email):
        raise EmailAlreadyRegisteredError(email)

    user = User(email=email, password_hash=get_password_hash(password))
    db.add(user)
    try:
        db.flush()
    except IntegrityError as e:
        db.rollback()
        raise EmailAlreadyRegisteredError(email) from e

    plain_text_token = issue_token(db, user, commit=False)
    db.commit()
    db.refresh(user)

    logger.info(f"Registered user {user.id}")
    return user, plain_text_token

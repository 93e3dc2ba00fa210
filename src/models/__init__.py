"""SQLAlchemy models."""

from src.models.personal_access_token import PersonalAccessToken
from src.models.post import Post
from src.models.user import User

__all__ = [
    "User",
    "Post",
    "PersonalAccessToken",
]

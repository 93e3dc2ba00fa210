"""Pydantic schemas for API requests and responses."""

from src.schemas.auth import AuthResponse, UserLogin, UserRegister
from src.schemas.post import PostCreate, PostResponse, PostUpdate

__all__ = [
    "UserRegister",
    "UserLogin",
    "AuthResponse",
    "PostCreate",
    "PostUpdate",
    "PostResponse",
]

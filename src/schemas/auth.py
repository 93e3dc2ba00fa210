"""Authentication schemas."""

from pydantic import BaseModel, ConfigDict, EmailStr, Field
from pydantic.alias_generators import to_camel


class UserEmail(BaseModel):
    """Just the email of a registration request."""

    email: EmailStr = Field(..., max_length=255)


class UserRegister(UserEmail):
    """User registration request."""

    password: str = Field(..., min_length=6)


class UserLogin(BaseModel):
    """User login request."""

    email: EmailStr = Field(..., max_length=255)
    password: str = Field(..., min_length=1)


class AuthResponse(BaseModel):
    """Envelope returned by every authentication endpoint.

    Serialized with camelCase keys: ``{"success", "errorMessage", "token"}``.
    Unused fields are empty strings rather than null.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    success: bool
    error_message: str = ""
    token: str = ""

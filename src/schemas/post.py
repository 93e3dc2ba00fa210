"""Post schemas."""

from pydantic import BaseModel, ConfigDict, Field


class PostCreate(BaseModel):
    """Create a new post."""

    model_config = ConfigDict(str_strip_whitespace=True)

    title: str = Field(..., min_length=1, max_length=255)
    body: str = Field(..., min_length=1)


class PostUpdate(BaseModel):
    """Update a post.

    Omitted fields are left untouched. A field that is sent must satisfy the
    same rules as on create, so an explicit null is rejected.
    """

    model_config = ConfigDict(str_strip_whitespace=True)

    title: str = Field(None, min_length=1, max_length=255)
    body: str = Field(None, min_length=1)


class PostResponse(BaseModel):
    """Public shape of a post."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
    body: str

"""Post API endpoints."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session

from src.database import get_db
from src.models.post import Post
from src.schemas.post import PostCreate, PostResponse, PostUpdate

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/posts", tags=["posts"])


def get_post_or_404(db: Session, post_id: int, *, for_update: bool = False) -> Post:
    """Get a post by id, locking the row when it is about to be modified."""
    query = db.query(Post).filter(Post.id == post_id)
    if for_update:
        query = query.with_for_update()

    post = query.first()
    if post is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Post not found.")
    return post


@router.get("", response_model=list[PostResponse])
async def list_posts(
    db: Annotated[Session, Depends(get_db)],
):
    """Get all posts."""
    return db.query(Post).order_by(Post.id).all()


@router.post("", response_model=PostResponse, status_code=status.HTTP_201_CREATED)
async def create_post(
    post_data: PostCreate,
    db: Annotated[Session, Depends(get_db)],
):
    """Create a new post."""
    post = Post(title=post_data.title, body=post_data.body)
    db.add(post)
    db.commit()
    db.refresh(post)

    logger.info(f"Created post {post.id}")
    return post


@router.get("/{post_id}", response_model=PostResponse)
async def get_post(
    post_id: int,
    db: Annotated[Session, Depends(get_db)],
):
    """Get a specific post."""
    return get_post_or_404(db, post_id)


def get_post_for_update(
    post_id: int,
    db: Annotated[Session, Depends(get_db)],
) -> Post:
    """Lock the post being updated; resolved before the request body is validated."""
    return get_post_or_404(db, post_id, for_update=True)


@router.put("/{post_id}", response_model=PostResponse)
@router.patch("/{post_id}", response_model=PostResponse)
async def update_post(
    post: Annotated[Post, Depends(get_post_for_update)],
    db: Annotated[Session, Depends(get_db)],
    post_data: PostUpdate | None = None,
):
    """Update the fields that were sent; the rest stay as they are."""
    if post_data is not None:
        for field, value in post_data.model_dump(exclude_unset=True).items():
            setattr(post, field, value)

    db.commit()
    db.refresh(post)

    logger.info(f"Updated post {post.id}")
    return post


@router.delete("/{post_id}")
async def delete_post(
    post_id: int,
    db: Annotated[Session, Depends(get_db)],
):
    """Delete a post.

    Clients rely on the confirmation message, so it is sent even though the
    status is 204. The Content-Length is set explicitly because Starlette
    omits it for 204 and the server would otherwise refuse to write the body.
    """
    post = get_post_or_404(db, post_id)
    db.delete(post)
    db.commit()

    logger.info(f"Deleted post {post_id}")
    response = JSONResponse(
        status_code=status.HTTP_204_NO_CONTENT,
        content={"message": "Post deleted successfully."},
    )
    response.headers["content-length"] = str(len(response.body))
    return response

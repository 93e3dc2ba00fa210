"""Post model."""

from sqlalchemy import Column, Integer, String, Text

from src.database import Base
from src.models.mixins import TimestampMixin


class Post(Base, TimestampMixin):
    """Post model. Posts are not owned by users."""

    __tablename__ = "posts"

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String(255), nullable=False)
    body = Column(Text, nullable=False)

"""
SQLAlchemy ORM models for the Posts service.

Defines the database schema for post-related tables.
"""
from sqlalchemy import Column, String, Text
from .database import Base


class Post(Base):
    """
    Post model representing a post written by a user.

    Attributes:
        id (str): Primary key, 24-character hex identifier assigned at creation
        user_id (str): Identifier of the owning user in the Users service.
            Checked only when the post is created; not a foreign key.
        title (str): Post title
        content (str): Post body
    """
    __tablename__ = "posts"

    id = Column(String(24), primary_key=True, index=True)
    user_id = Column(String, nullable=False, index=True)
    title = Column(String, nullable=False, default="")
    content = Column(Text, nullable=False, default="")

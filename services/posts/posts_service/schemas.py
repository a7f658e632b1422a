"""
Pydantic schemas for request/response validation in the Posts service.

These schemas define the structure of data for API requests and responses,
plus the reply of the Users service existence check.
"""
from typing import List
from pydantic import BaseModel, Field


class PostCreate(BaseModel):
    """Schema for creating a new post. The identifier is always server-assigned."""
    user_id: str = Field(..., min_length=1, description="Identifier of the owning user")
    title: str = ""
    content: str = ""


class Post(BaseModel):
    """
    Schema for post responses.

    Attributes:
        id (str): Post's unique identifier
        user_id (str): Identifier of the owning user
        title (str): Post title
        content (str): Post body
    """
    id: str
    user_id: str
    title: str
    content: str

    class Config:
        from_attributes = True


class UserPosts(BaseModel):
    """All posts belonging to one user."""
    user_id: str
    posts: List[Post]


class UserExistence(BaseModel):
    """Reply of the Users service existence check."""
    id: str
    exists: bool


class Message(BaseModel):
    message: str

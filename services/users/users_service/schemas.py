"""
Pydantic schemas for request/response validation in the Users service.

These schemas define the structure of data for API requests and responses.
"""
from pydantic import BaseModel


class UserCreate(BaseModel):
    """Schema for creating a new user. The identifier is always server-assigned."""
    name: str = ""


class User(BaseModel):
    """
    Schema for user responses.

    Attributes:
        id (str): User's unique identifier
        name (str): User's display name
    """
    id: str
    name: str

    class Config:
        from_attributes = True


class UserExistence(BaseModel):
    """Answer to an existence check: the queried identifier and whether it is stored."""
    id: str
    exists: bool


class Message(BaseModel):
    message: str

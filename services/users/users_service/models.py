"""
SQLAlchemy ORM models for the Users service.

Defines the database schema for user-related tables.
"""
from sqlalchemy import Column, String
from .database import Base


class User(Base):
    """
    User model representing a user in the system.

    Attributes:
        id (str): Primary key, 24-character hex identifier assigned at creation
        name (str): User's display name (not unique)
    """
    __tablename__ = "users"

    id = Column(String(24), primary_key=True, index=True)
    name = Column(String, nullable=False)

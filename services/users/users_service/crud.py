"""
CRUD (Create, Read, Delete) operations for the Users service.

This module contains all database operations for user management.
Users are never updated in place.
"""
import logging
from typing import List
from sqlalchemy.orm import Session
from . import models, schemas
from .ids import new_object_id

logger = logging.getLogger(__name__)


def get_users(db: Session) -> List[models.User]:
    """
    Retrieve all users.

    Args:
        db: Database session

    Returns:
        List of User objects
    """
    return db.query(models.User).all()


def count_users(db: Session, user_id: str) -> int:
    """
    Count users with the given identifier.

    Only the count is fetched, never the record itself.

    Args:
        db: Database session
        user_id: Parsed user identifier

    Returns:
        Number of matching users (0 or 1)
    """
    return db.query(models.User).filter(models.User.id == user_id).count()


def create_user(db: Session, user: schemas.UserCreate) -> models.User:
    """
    Create a new user in the database with a freshly generated identifier.

    Args:
        db: Database session
        user: User data to create

    Returns:
        Created User object
    """
    db_user = models.User(id=new_object_id(), name=user.name)
    db.add(db_user)
    try:
        db.commit()
    except Exception:
        db.rollback()
        raise
    db.refresh(db_user)
    logger.info(f"Created user {db_user.id}")
    return db_user


def delete_user(db: Session, user_id: str) -> bool:
    """
    Delete a user from the database.

    Args:
        db: Database session
        user_id: Parsed identifier of the user to delete

    Returns:
        True if user was deleted, False if not found
    """
    try:
        deleted = db.query(models.User).filter(models.User.id == user_id).delete(synchronize_session=False)
        db.commit()
    except Exception:
        db.rollback()
        raise
    if deleted:
        logger.info(f"Deleted user {user_id}")
    return deleted > 0

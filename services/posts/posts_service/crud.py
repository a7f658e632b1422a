"""
CRUD (Create, Read, Delete) operations for the Posts service.

This module contains all database operations for post management.
None of these functions talk to the Users service; callers gate create and
list-by-user behind the existence check first.
"""
import logging
from typing import List
from sqlalchemy.orm import Session
from . import models, schemas
from .ids import new_object_id

# Set up logging
logger = logging.getLogger(__name__)


def get_posts_by_user(db: Session, user_id: str) -> List[models.Post]:
    """
    Retrieve all posts owned by a user.

    Args:
        db: Database session
        user_id: Identifier of the owning user

    Returns:
        List of Post objects
    """
    return db.query(models.Post).filter(models.Post.user_id == user_id).all()


def create_post(db: Session, post: schemas.PostCreate) -> models.Post:
    """
    Create a new post in the database.

    NOTE: This function assumes the owning user has already been verified.

    Args:
        db: Database session
        post: Post data to create

    Returns:
        Created Post object
    """
    db_post = models.Post(
        id=new_object_id(),
        user_id=post.user_id,
        title=post.title,
        content=post.content,
    )
    db.add(db_post)
    try:
        db.commit()
    except Exception:
        db.rollback()
        raise
    db.refresh(db_post)
    logger.info(f"Created post {db_post.id} for user {db_post.user_id}")
    return db_post


def delete_post(db: Session, post_id: str) -> bool:
    """
    Delete a post from the database.

    Args:
        db: Database session
        post_id: Parsed identifier of the post to delete

    Returns:
        True if post was deleted, False if not found
    """
    try:
        deleted = db.query(models.Post).filter(models.Post.id == post_id).delete(synchronize_session=False)
        db.commit()
    except Exception:
        db.rollback()
        raise
    if deleted:
        logger.info(f"Deleted post {post_id}")
    return deleted > 0

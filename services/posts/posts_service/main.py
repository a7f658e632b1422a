"""
Posts Service API

This module implements the posts microservice. Every post references a user
owned by the Users service; creating posts and listing a user's posts are
only allowed once the Users service confirms that user exists.

Endpoints:
    GET /ping: Plain-text liveness reply
    GET /healthz: Health check endpoint for orchestration systems
    GET /posts/{user_id}: List a user's posts (user verified first)
    POST /posts: Create a post (user verified first)
    DELETE /posts/{post_id}: Delete a post (no user verification)

Verification outcomes map to distinct statuses: 404 when the user does not
exist, 502 when the Users service cannot be reached or gives an unusable reply.

Attributes:
    app (FastAPI): The application instance built from the environment defaults.
"""
import logging
import os
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import APIRouter, Depends, FastAPI, HTTPException, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, PlainTextResponse
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from starlette.concurrency import run_in_threadpool

from . import crud, database, models, schemas
from .clients.users_client import UsersClient, UserServiceUnavailable
from .database import get_db
from .ids import InvalidObjectId, parse_object_id

logger = logging.getLogger(__name__)

HOST = os.getenv("HOST", "0.0.0.0")
PORT = int(os.getenv("PORT", "8081"))

router = APIRouter()


def get_users_client(request: Request) -> UsersClient:
    """Dependency returning the Users service client owned by the application."""
    return request.app.state.users_client


async def ensure_user_exists(users_client: UsersClient, user_id: str) -> None:
    """
    Gate an operation behind the Users service existence check.

    Raises:
        HTTPException: 404 if the user does not exist
        UserServiceUnavailable: If existence cannot be determined (answered with 502)
    """
    if not await users_client.user_exists(user_id):
        raise HTTPException(status_code=404, detail="user does not exist")


@router.get("/ping", response_class=PlainTextResponse)
def ping():
    return "post pong"


@router.get("/healthz", response_model=dict)
def health():
    """
    Health check endpoint for the posts service.

    Does not contact the Users service or the database.

    Returns:
        dict: Always {"status": "healthy"} when the service is operational.
    """
    return {"status": "healthy"}


@router.get("/posts/{user_id}", response_model=schemas.UserPosts)
async def list_user_posts(
    user_id: str,
    db: Session = Depends(get_db),
    users_client: UsersClient = Depends(get_users_client),
):
    """
    List all posts of a user.

    The user is verified on every call, so a deleted user yields 404 rather
    than their remaining posts.

    Args:
        user_id: Identifier of the owning user
        db: Database session (injected)
        users_client: Users service client (injected)

    Returns:
        {"user_id": user_id, "posts": [...]}

    Raises:
        HTTPException: 404 if the user does not exist
    """
    await ensure_user_exists(users_client, user_id)
    posts = await run_in_threadpool(crud.get_posts_by_user, db, user_id)
    return {"user_id": user_id, "posts": posts}


@router.post("/posts", response_model=schemas.Post, status_code=status.HTTP_201_CREATED)
async def create_post(
    post: schemas.PostCreate,
    db: Session = Depends(get_db),
    users_client: UsersClient = Depends(get_users_client),
):
    """
    Create a new post for an existing user.

    This endpoint:
    - Validates the user exists in the Users service
    - Stores the post with a server-assigned identifier

    Args:
        post: Post data to create
        db: Database session (injected)
        users_client: Users service client (injected)

    Returns:
        Created post object

    Raises:
        HTTPException: 404 if the user does not exist
    """
    await ensure_user_exists(users_client, post.user_id)
    return await run_in_threadpool(crud.create_post, db, post)


@router.delete("/posts/{post_id}", response_model=schemas.Message)
def delete_post(post_id: str, db: Session = Depends(get_db)):
    """
    Delete a post by its identifier alone; the owning user is not checked.

    Raises:
        HTTPException: 404 if post not found
    """
    if not crud.delete_post(db, parse_object_id(post_id)):
        raise HTTPException(status_code=404, detail="post not found")
    return {"message": "post deleted"}


def create_app(engine: Optional[Engine] = None, users_client: Optional[UsersClient] = None) -> FastAPI:
    """
    Build the posts service application.

    Args:
        engine: SQLAlchemy engine to store posts in. Defaults to one built from DATABASE_URL.
        users_client: Existence-check client. Defaults to one for USERS_SERVICE_URL.

    Returns:
        FastAPI: Configured application
    """
    if engine is None:
        engine = database.build_engine()
    if users_client is None:
        users_client = UsersClient()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        # Create database tables
        models.Base.metadata.create_all(bind=app.state.engine)
        yield

    app = FastAPI(title="posts-service", lifespan=lifespan)
    app.state.engine = engine
    app.state.session_factory = database.session_factory(engine)
    app.state.users_client = users_client
    app.include_router(router)

    @app.exception_handler(RequestValidationError)
    async def handle_validation_error(_: Request, exc: RequestValidationError):
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"detail": "Invalid request body", "errors": jsonable_encoder(exc.errors())},
        )

    @app.exception_handler(InvalidObjectId)
    async def handle_invalid_id(_: Request, exc: InvalidObjectId):
        return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"detail": str(exc)})

    @app.exception_handler(UserServiceUnavailable)
    async def handle_users_unavailable(_: Request, exc: UserServiceUnavailable):
        return JSONResponse(
            status_code=status.HTTP_502_BAD_GATEWAY,
            content={"detail": "cannot connect to user-service", "reason": exc.reason},
        )

    @app.exception_handler(SQLAlchemyError)
    async def handle_store_error(request: Request, exc: SQLAlchemyError):
        logger.error(f"Store error on {request.method} {request.url.path}: {exc}")
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"detail": f"Store error: {exc}"},
        )

    return app


app = create_app()


def run() -> None:
    """Serve the posts service with uvicorn."""
    import uvicorn

    logging.basicConfig(level=logging.INFO, format="%(asctime)s [%(levelname)s] %(message)s")
    uvicorn.run(app, host=HOST, port=PORT)


if __name__ == "__main__":
    run()

"""
Users Service FastAPI Application.

This module implements the users microservice. It owns the user records and
answers existence checks for the Posts service.

Endpoints:
    GET /ping: Plain-text liveness reply
    GET /healthz: Health check endpoint for orchestration systems
    GET /users: List all users
    POST /users: Create a user (identifier assigned by the service)
    DELETE /users/{user_id}: Delete a user
    GET /users/exists/{user_id}: Report whether a user exists

Attributes:
    app (FastAPI): The application instance built from the environment defaults.
"""
import logging
import os
from contextlib import asynccontextmanager
from typing import List, Optional

from fastapi import APIRouter, Depends, FastAPI, HTTPException, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, PlainTextResponse
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from . import crud, database, models, schemas
from .database import get_db
from .ids import InvalidObjectId, parse_object_id

logger = logging.getLogger(__name__)

HOST = os.getenv("HOST", "0.0.0.0")
PORT = int(os.getenv("PORT", "8080"))

router = APIRouter()


@router.get("/ping", response_class=PlainTextResponse)
def ping():
    return "user pong"


@router.get("/healthz", response_model=dict)
def health():
    """
    Health check endpoint for the users service.

    Returns:
        dict: Always {"status": "healthy"} when the service is operational.
    """
    return {"status": "healthy"}


@router.get("/users", response_model=List[schemas.User])
def list_users(db: Session = Depends(get_db)):
    """
    List all users.

    Args:
        db: Database session (injected)

    Returns:
        List of user objects
    """
    return crud.get_users(db)


@router.post("/users", response_model=schemas.User, status_code=status.HTTP_201_CREATED)
def create_user(user: schemas.UserCreate, db: Session = Depends(get_db)):
    """
    Create a new user.

    Args:
        user: User data to create
        db: Database session (injected)

    Returns:
        Created user object, including its server-assigned identifier
    """
    return crud.create_user(db, user)


@router.delete("/users/{user_id}", response_model=schemas.Message)
def delete_user(user_id: str, db: Session = Depends(get_db)):
    """
    Delete a user.

    Posts referencing the user are left untouched.

    Raises:
        HTTPException: 404 if user not found
    """
    if not crud.delete_user(db, parse_object_id(user_id)):
        raise HTTPException(status_code=404, detail="user not found")
    return {"message": "deleted successfully"}


@router.get("/users/exists/{user_id}", response_model=schemas.UserExistence)
def check_user_exists(user_id: str, db: Session = Depends(get_db)):
    """
    Report whether a user with the given identifier exists.

    A missing user is a successful answer (exists=false), not a 404.
    The identifier is echoed back exactly as received.

    Args:
        user_id: Identifier to look up
        db: Database session (injected)

    Returns:
        {"id": user_id, "exists": bool}
    """
    count = crud.count_users(db, parse_object_id(user_id))
    return {"id": user_id, "exists": count > 0}


def create_app(engine: Optional[Engine] = None) -> FastAPI:
    """
    Build the users service application.

    Args:
        engine: SQLAlchemy engine to store users in. Defaults to one built from DATABASE_URL.

    Returns:
        FastAPI: Configured application
    """
    if engine is None:
        engine = database.build_engine()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        # Create database tables
        models.Base.metadata.create_all(bind=app.state.engine)
        yield

    app = FastAPI(title="users-service", lifespan=lifespan)
    app.state.engine = engine
    app.state.session_factory = database.session_factory(engine)
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
    """Serve the users service with uvicorn."""
    import uvicorn

    logging.basicConfig(level=logging.INFO, format="%(asctime)s [%(levelname)s] %(message)s")
    uvicorn.run(app, host=HOST, port=PORT)


if __name__ == "__main__":
    run()

import sys
from pathlib import Path

import pytest
from sqlalchemy.pool import StaticPool

ROOT = Path(__file__).resolve().parents[1]
for service_dir in (ROOT / "services" / "users", ROOT / "services" / "posts"):
    if str(service_dir) not in sys.path:
        sys.path.insert(0, str(service_dir))

from users_service import database as users_database
from users_service import models as users_models
from posts_service import database as posts_database
from posts_service import models as posts_models


def memory_engine(build_engine):
    return build_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )


class StubUsersClient:
    """Stands in for the Users service: answers from a set or raises a given error."""

    def __init__(self, existing=(), error=None):
        self.existing = set(existing)
        self.error = error
        self.calls = []

    async def user_exists(self, user_id: str) -> bool:
        self.calls.append(user_id)
        if self.error is not None:
            raise self.error
        return user_id in self.existing


@pytest.fixture()
def users_engine():
    engine = memory_engine(users_database.build_engine)
    users_models.Base.metadata.create_all(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture()
def posts_engine():
    engine = memory_engine(posts_database.build_engine)
    posts_models.Base.metadata.create_all(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture()
def empty_users_engine():
    """An engine with no tables: any query against it fails."""
    engine = memory_engine(users_database.build_engine)
    yield engine
    engine.dispose()


@pytest.fixture()
def empty_posts_engine():
    engine = memory_engine(posts_database.build_engine)
    yield engine
    engine.dispose()

from datetime import datetime, timedelta, timezone

import pytest
from bson import ObjectId
from httpx import ASGITransport, AsyncClient
from mongomock_motor import AsyncMongoMockClient

from review_moderation.app import create_app
from review_moderation.core.config import Settings
from review_moderation.database.db import get_db_dep
from review_moderation.repo.review_repo import USERS_COLL, ensure_review_indexes

ALICE_ID = str(ObjectId())
BOB_ID = str(ObjectId())
MODERATOR_ID = str(ObjectId())


def as_user(user_id: str = ALICE_ID) -> dict:
    return {"X-User-Id": user_id, "X-User-Role": "USER"}


def as_moderator(user_id: str = MODERATOR_ID) -> dict:
    return {"X-User-Id": user_id, "X-User-Role": "MODERATOR"}


def at(minutes: int) -> datetime:
    """Fixed creation times so ordering does not depend on the clock."""
    return datetime(2024, 1, 1, tzinfo=timezone.utc) + timedelta(minutes=minutes)


@pytest.fixture
async def db():
    client = AsyncMongoMockClient()
    database = client["review_moderation_test"]
    await ensure_review_indexes(database)
    await database[USERS_COLL].insert_many(
        [
            {"_id": ObjectId(ALICE_ID), "username": "alice", "email": "alice@example.com"},
            {"_id": ObjectId(BOB_ID), "username": "bob", "email": "bob@example.com"},
        ]
    )
    return database


@pytest.fixture
def app(db):
    application = create_app(Settings())

    async def _db_override():
        yield db

    application.dependency_overrides[get_db_dep] = _db_override
    return application


@pytest.fixture
async def client(app):
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://testserver") as c:
        yield c

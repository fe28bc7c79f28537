"""
Pytest configuration and fixtures for testing.

Route tests run against an in-memory async Mongo client installed on
`app.state`, the same slot the startup hook fills with a Motor client.
"""

import asyncio

import pytest
from bson import ObjectId
from fastapi.testclient import TestClient
from mongomock_motor import AsyncMongoMockClient

from app.auth.jwt import create_access_token
from app.main import app

TEST_DB_NAME = "immigration_portal_test"


def run(coro):
    """Run a single Mongo coroutine from synchronous test code."""
    return asyncio.run(coro)


@pytest.fixture
def mongo_client():
    return AsyncMongoMockClient()


@pytest.fixture
def db(mongo_client):
    return mongo_client[TEST_DB_NAME]


@pytest.fixture
def client(mongo_client):
    """
    FastAPI test client backed by the in-memory database.

    Used without the context manager so the startup hook does not replace
    the mock client with a real one.
    """
    app.state.mongo_client = mongo_client
    app.state.db_name = TEST_DB_NAME
    yield TestClient(app)
    app.state.mongo_client = None


@pytest.fixture
def user(db):
    user_id = ObjectId()
    run(db.users.insert_one({
        "_id": user_id,
        "name": "Priya Sharma",
        "email": "priya@example.com",
        "role": "client",
    }))
    return {"id": str(user_id), "name": "Priya Sharma", "email": "priya@example.com", "role": "client"}


@pytest.fixture
def auth_headers(user):
    return {"Authorization": f"Bearer {create_access_token(user['id'])}"}


@pytest.fixture
def active_file(db, user):
    file_id = ObjectId()
    run(db.immigration_files.insert_one({
        "_id": file_id,
        "user_id": ObjectId(user["id"]),
        "file_number": "IMM-1700000000000-abcd",
        "category": "Express Entry",
        "status": "New",
        "crs_score": 0,
        "is_active": True,
    }))
    return file_id


@pytest.fixture
def sample_form():
    """Bachelor's degree, CLB 7 across the board, 3 years of work, single."""
    return {
        "age": 25,
        "education": "bachelor",
        "workExperience": 3,
        "englishListening": 7,
        "englishReading": 7,
        "englishWriting": 7,
        "englishSpeaking": 7,
        "hasSpouse": False,
        "jobOffer": False,
        "provincialNomination": False,
        "siblingInCanada": False,
    }

import os

# Settings are read at import time
os.environ["ENVIRONMENT"] = "testing"
os.environ["SQLITE_MODE"] = "True"
os.environ["SECRET_KEY"] = "test-secret-key"
os.environ["LOG_LEVEL"] = "WARNING"
os.environ["TOKEN_AUDIENCE"] = ""
os.environ["TOKEN_ISSUER"] = ""

from datetime import datetime, timedelta, timezone
from typing import Optional

import pytest
from httpx import ASGITransport, AsyncClient
from jose import jwt

from core.config import settings
from core.identity import IdentityProvider
from db.document_store import DocumentStore
from main import app
from models.enums import Resource
from schemas.user_schemas import UserProfile
from utils.time_utils import iso_now

MEMORY_URL = "sqlite+aiosqlite:///:memory:"


class RecordingStore:
    """Store wrapper that records every call reaching the real store"""

    def __init__(self, inner: DocumentStore):
        self.inner = inner
        self.calls = []

    def __getattr__(self, name):
        attr = getattr(self.inner, name)
        if not callable(attr):
            return attr

        async def recorded(*args, **kwargs):
            self.calls.append((name, args))
            return await attr(*args, **kwargs)

        return recorded


@pytest.fixture
async def store():
    document_store = DocumentStore(MEMORY_URL)
    await document_store.create_collections()
    yield document_store
    await document_store.close()


@pytest.fixture
def recording_store(store):
    return RecordingStore(store)


@pytest.fixture
def identity():
    return IdentityProvider(secret_key=settings.SECRET_KEY, algorithm=settings.ALGORITHM)


@pytest.fixture
def make_token():
    def _make_token(subject: str, expires_in: int = 3600, **claims) -> str:
        payload = {
            "sub": subject,
            "exp": datetime.now(timezone.utc) + timedelta(seconds=expires_in),
            **claims,
        }
        return jwt.encode(payload, settings.SECRET_KEY, algorithm=settings.ALGORITHM)

    return _make_token


@pytest.fixture
def make_user(store):
    """Seed a profile directly in the users collection"""

    async def _make_user(
        role: str, uid: Optional[str] = None, is_active: bool = True, **fields
    ) -> UserProfile:
        uid = uid or f"{role}-uid"
        data = {
            "uid": uid,
            "email": f"{uid}@clinic.org",
            "displayName": f"Test {role.title()}",
            "role": role,
            "permissions": [],
            "isActive": is_active,
            "createdAt": iso_now(),
            **fields,
        }
        snapshot = await store.add(Resource.USERS.value, data)
        return UserProfile.model_validate(snapshot)

    return _make_user


@pytest.fixture
def login(make_user, make_token):
    """Seed a profile and return it with matching Authorization headers"""

    async def _login(role: str, **fields):
        user = await make_user(role, **fields)
        return user, {"Authorization": f"Bearer {make_token(user.uid)}"}

    return _login


@pytest.fixture
async def client(store, identity):
    app.state.store = store
    app.state.identity = identity
    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test"
    ) as async_client:
        yield async_client
    app.dependency_overrides.clear()

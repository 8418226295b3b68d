"""
Test configuration and fixtures for pytest
"""
import cloudinary.exceptions
import pytest
import pytest_asyncio
from fastapi.testclient import TestClient
from mongomock_motor import AsyncMongoMockClient

from main import app
from storefront.config import Settings, get_settings
from storefront.database import create_indexes, get_database
from storefront.dependencies import get_usage_client, get_usage_client_factory
from storefront.middleware.auth_middleware import verify_api_key
from storefront.services.cloudinary_client import CloudinaryUsageClient

GIB = 1024 * 1024 * 1024

TEST_DATABASE_NAME = "wa_storefront_test"


@pytest.fixture
def settings():
    """Settings with test Cloudinary credentials and no background job"""
    return Settings(
        _env_file=None,
        CLOUDINARY_CLOUD_NAME="demo-cloud",
        CLOUDINARY_API_KEY="123456789012345",
        CLOUDINARY_API_SECRET="test-secret",
        CLOUDINARY_UPLOAD_PRESET=None,
        CLOUDINARY_ROOT_FOLDER="mycms",
        STORAGE_CAPACITY_BYTES=2 * GIB,
        QUOTA_CHECK_ENABLED=False
    )


@pytest.fixture
def db():
    """In-memory database"""
    return AsyncMongoMockClient()[TEST_DATABASE_NAME]


@pytest_asyncio.fixture
async def indexed_db(db):
    """In-memory database with the production indexes"""
    await create_indexes(db)
    return db


@pytest.fixture
def usage_report():
    """Body the fake CDN returns; tests mutate it"""
    return {"storage": {"usage": 0}}


@pytest.fixture
def cdn_calls():
    """Keyword arguments of every call made to the fake usage API"""
    return []


@pytest.fixture
def usage_api(usage_report, cdn_calls):
    """Stand-in for cloudinary.api.usage"""
    def fake_usage(**options):
        cdn_calls.append(options)
        return usage_report

    return fake_usage


@pytest.fixture
def failing_usage_api():
    """Build a usage API stand-in that raises the given SDK error"""
    def build(error: cloudinary.exceptions.Error):
        def fake_usage(**options):
            raise error
        return fake_usage

    return build


@pytest.fixture
def usage_client(settings, usage_api):
    return CloudinaryUsageClient.from_settings(settings, usage_api=usage_api)


@pytest.fixture
def client(db, settings, usage_client):
    """FastAPI TestClient with the database, settings, CDN and auth overridden"""

    async def override_database():
        return db

    app.dependency_overrides[get_database] = override_database
    app.dependency_overrides[get_settings] = lambda: settings
    app.dependency_overrides[get_usage_client] = lambda: usage_client
    app.dependency_overrides[get_usage_client_factory] = lambda: (lambda: usage_client)
    app.dependency_overrides[verify_api_key] = lambda: {"name": "test-admin"}

    yield TestClient(app)

    app.dependency_overrides.clear()

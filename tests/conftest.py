import httpx
import pytest

from backend import app, db
from storefront.client import Storefront
from storefront.config import Settings
from storefront.session import MemoryStorage


@pytest.fixture
def backend():
    db.reset()
    return db


@pytest.fixture
def storage():
    return MemoryStorage()


@pytest.fixture
def settings(tmp_path):
    # small pages so the five seeded products span several of them
    return Settings(api_url="http://testserver", session_file=str(tmp_path / "session.json"), page_size=2)


@pytest.fixture
def transport(backend):
    return httpx.ASGITransport(app=app)


@pytest.fixture
async def shop(settings, storage, transport):
    async with Storefront(settings, storage, transport=transport) as shop:
        yield shop


@pytest.fixture
async def customer(shop):
    await shop.auth.login("alice", "password")
    return shop


@pytest.fixture
async def admin(shop):
    await shop.auth.login("admin", "admin123")
    return shop

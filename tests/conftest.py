import os

os.environ["JWT_SECRET"] = "test-signing-key-0123456789abcdef0123456789"
os.environ["ACCESS_TOKEN_EXPIRE_MINUTES"] = "60"

import pytest  # noqa: E402
import pytest_asyncio  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402


@pytest_asyncio.fixture
async def database(tmp_path):
    from crushmatch.database import Database
    from crushmatch.main import app

    db = Database(f"sqlite+aiosqlite:///{tmp_path / 'test.sqlite3'}")
    await db.open()
    app.state.database = db
    yield db
    await db.close()


@pytest_asyncio.fixture
async def db_session(database):
    async with database.session() as session:
        yield session


@pytest_asyncio.fixture
async def client(database):
    from crushmatch.main import app

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as c:
        yield c


@pytest.fixture
def signup():
    """Register ``username`` and log in, returning ``(user_id, auth_headers)``."""

    async def _signup(client, username, password="secret123"):
        response = await client.post(
            "/api/register", json={"username": username, "password": password}
        )
        assert response.status_code == 201
        response = await client.post(
            "/api/login", json={"username": username, "password": password}
        )
        assert response.status_code == 200
        data = response.json()
        return data["userId"], {"Authorization": f"Bearer {data['token']}"}

    return _signup

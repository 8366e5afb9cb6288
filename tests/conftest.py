from __future__ import annotations

import asyncio
import os

import pytest

from app.core.db import Base, create_engine, create_sessionmaker

TEST_JWT_SECRET = "test-secret-key-0123456789"


@pytest.fixture()
def database_url(tmp_path) -> str:
    db_file = tmp_path / "test.sqlite3"
    return f"sqlite+aiosqlite:///{db_file}"


@pytest.fixture(autouse=True)
def _set_test_environment(database_url: str) -> None:
    os.environ["DATABASE_URL"] = database_url
    os.environ["JWT_SECRET_KEY"] = TEST_JWT_SECRET
    # Settings are cached via @lru_cache; clear so each test can use its own DB URL.
    from app.core.settings import get_settings

    get_settings.cache_clear()


@pytest.fixture(autouse=True)
def _create_test_schema(database_url: str, _set_test_environment: None) -> None:
    async def run() -> None:
        # Ensure all model modules are imported so Base.metadata is populated.
        from app.patients import models as _patients_models  # noqa: F401
        from app.physiotherapists import models as _physiotherapists_models  # noqa: F401

        engine = create_engine(database_url=database_url)
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        await engine.dispose()

    asyncio.run(run())


@pytest.fixture
def owners(database_url: str, _create_test_schema: None) -> dict[str, int]:
    """Physiotherapist ids: two active owners and one deactivated account."""

    from app.physiotherapists.models import Physiotherapist

    async def run() -> dict[str, int]:
        engine = create_engine(database_url=database_url)
        sessionmaker = create_sessionmaker(engine=engine)
        async with sessionmaker() as session:
            rows = {
                "alice": Physiotherapist(
                    email="alice@example.com", first_name="Alicja", last_name="Nowak"
                ),
                "bob": Physiotherapist(
                    email="bob@example.com", first_name="Bartosz", last_name="Mazur"
                ),
                "inactive": Physiotherapist(
                    email="gone@example.com", first_name="Ida", last_name="Kwiat", is_active=False
                ),
            }
            session.add_all(rows.values())
            await session.commit()
            ids = {key: owner.id for key, owner in rows.items()}
        await engine.dispose()
        return ids

    return asyncio.run(run())


def _bearer(owner_id: int) -> dict[str, str]:
    from app.core.security import create_access_token

    return {"Authorization": f"Bearer {create_access_token(owner_id=owner_id)}"}


@pytest.fixture
def alice_headers(owners: dict[str, int]) -> dict[str, str]:
    return _bearer(owners["alice"])


@pytest.fixture
def bob_headers(owners: dict[str, int]) -> dict[str, str]:
    return _bearer(owners["bob"])


@pytest.fixture
def client():
    from fastapi.testclient import TestClient

    from app.main import create_app

    app = create_app()
    with TestClient(app) as c:
        yield c

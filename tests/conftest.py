import pytest
from fastapi.testclient import TestClient

from pasties.config import Settings
from pasties.core.db import create_engine, create_session_factory, init_db
from pasties.db.repositories.paste_repository import PasteRepository
from pasties.domains.pastes.services import PasteService
from pasties.main import create_app


@pytest.fixture
def settings(tmp_path) -> Settings:
    # Дешёвые параметры argon2, чтобы тесты не тормозили
    return Settings(
        _env_file=None,
        database_url=f"sqlite+aiosqlite:///{tmp_path / 'pasties.db'}",
        argon2_time_cost=1,
        argon2_memory_cost=1024,
        argon2_parallelism=1,
        content_max_length=1000,
    )


@pytest.fixture
async def session_factory(settings):
    engine = create_engine(settings)
    await init_db(engine)
    yield create_session_factory(engine)
    await engine.dispose()


@pytest.fixture
def repository(session_factory) -> PasteRepository:
    return PasteRepository(session_factory)


@pytest.fixture
def service(session_factory, settings) -> PasteService:
    return PasteService.from_settings(session_factory, settings)


@pytest.fixture
def client(settings):
    with TestClient(create_app(settings)) as test_client:
        yield test_client

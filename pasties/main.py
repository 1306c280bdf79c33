import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from pasties import __version__
from pasties.api.errors import setup_exception_handlers
from pasties.api.http import health_router, pastes_router
from pasties.config import Settings, get_settings
from pasties.core.db import create_engine, create_session_factory, init_db
from pasties.core.logging import configure_logging
from pasties.domains.pastes.services import PasteService

logger = logging.getLogger(__name__)


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or get_settings()
    configure_logging(settings.log_level)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        engine = create_engine(settings)
        await init_db(engine)
        app.state.session_factory = create_session_factory(engine)
        app.state.paste_service = PasteService.from_settings(app.state.session_factory, settings)
        logger.info(f"Pasties {__version__} started, database: {engine.url.render_as_string(hide_password=True)}")
        try:
            yield
        finally:
            await engine.dispose()

    app = FastAPI(
        title="Pasties",
        description="Markdown pastebin with password-protected editing",
        version=__version__,
        lifespan=lifespan
    )

    # Настройка CORS для работы с frontend
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    setup_exception_handlers(app)

    # Подключаем роутеры
    app.include_router(health_router)
    app.include_router(pastes_router)

    return app

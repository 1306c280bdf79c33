from pasties.api.http.health import router as health_router
from pasties.api.http.pastes import router as pastes_router

__all__ = [
    "health_router",
    "pastes_router"
]

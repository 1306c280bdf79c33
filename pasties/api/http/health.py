from fastapi import APIRouter

from pasties import __version__

router = APIRouter(tags=["health"])


@router.get("/health")
async def health():
    """Проверка доступности сервиса"""
    return {"status": "ok", "version": __version__}

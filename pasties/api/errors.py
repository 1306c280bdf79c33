import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from pasties.domains.pastes.errors import (
    AllocationExhausted, InvalidContent, InvalidSlug, NotFound, PasteError,
    SlugTaken, Unauthorized
)

logger = logging.getLogger(__name__)

STATUS_BY_ERROR = {
    InvalidSlug: status.HTTP_400_BAD_REQUEST,
    InvalidContent: status.HTTP_400_BAD_REQUEST,
    Unauthorized: status.HTTP_401_UNAUTHORIZED,
    NotFound: status.HTTP_404_NOT_FOUND,
    SlugTaken: status.HTTP_409_CONFLICT,
    AllocationExhausted: status.HTTP_503_SERVICE_UNAVAILABLE,
}


def status_for(exc: PasteError) -> int:
    for error_type, status_code in STATUS_BY_ERROR.items():
        if isinstance(exc, error_type):
            return status_code
    return status.HTTP_500_INTERNAL_SERVER_ERROR


def setup_exception_handlers(app: FastAPI) -> None:
    """Ошибки домена превращаются в ответы с понятным сообщением"""

    @app.exception_handler(PasteError)
    async def paste_error_handler(request: Request, exc: PasteError):
        status_code = status_for(exc)
        if status_code >= 500:
            logger.error(f"{exc.code} on {request.url.path}: {exc.message}")
        return JSONResponse(
            status_code=status_code,
            content={"detail": exc.message, "code": exc.code},
        )

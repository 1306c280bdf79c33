from fastapi import APIRouter, Depends, Request, Response, status
from fastapi.responses import HTMLResponse

from pasties.domains.pastes.schemas import (
    PasteCreate, PasteCreated, PasteDelete, PasteResponse, PasteSummary,
    PasteUpdate, RenderRequest
)
from pasties.domains.pastes.services import PasteService

router = APIRouter(prefix="/api", tags=["pastes"])


def get_paste_service(request: Request) -> PasteService:
    """Зависимость: сервис поверх фабрики сессий приложения"""
    return request.app.state.paste_service


@router.get("/")
async def api_root():
    return {"message": "This is a route reserved for the pasties API."}


@router.post("/pastes", response_model=PasteCreated, status_code=status.HTTP_201_CREATED)
async def create_paste(
    paste_data: PasteCreate,
    service: PasteService = Depends(get_paste_service)
):
    """Создание новой пасты"""
    created = await service.create_paste(
        paste_data.content,
        password=paste_data.password,
        slug=paste_data.slug
    )
    return PasteCreated(slug=created.slug, password=created.generated_password)


@router.get("/pastes/{slug}", response_model=PasteResponse)
async def get_paste(
    slug: str,
    service: PasteService = Depends(get_paste_service)
):
    """Получение пасты по slug"""
    rendered = await service.get_paste(slug)
    paste = rendered.paste
    return PasteResponse(
        slug=paste.slug,
        content=paste.content,
        html=rendered.html,
        created_at=paste.created_at,
        edited_at=paste.edited_at
    )


@router.put("/pastes/{slug}", response_model=PasteSummary)
async def update_paste(
    slug: str,
    update_data: PasteUpdate,
    service: PasteService = Depends(get_paste_service)
):
    """Обновление пасты"""
    paste = await service.update_paste(
        slug,
        update_data.password,
        new_slug=update_data.new_slug,
        content=update_data.content,
        new_password=update_data.new_password
    )
    return PasteSummary.model_validate(paste)


@router.delete("/pastes/{slug}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_paste(
    slug: str,
    delete_data: PasteDelete,
    service: PasteService = Depends(get_paste_service)
):
    """Удаление пасты"""
    await service.delete_paste(slug, delete_data.password)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("/render", response_class=HTMLResponse)
async def render_preview(
    render_request: RenderRequest,
    service: PasteService = Depends(get_paste_service)
):
    """Предпросмотр markdown"""
    return HTMLResponse(await service.render_preview(render_request.content))

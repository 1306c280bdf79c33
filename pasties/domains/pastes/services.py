import asyncio
import logging
from typing import Optional

from sqlalchemy.ext.asyncio import async_sessionmaker

from pasties.config import Settings
from pasties.core.security import CredentialGuard, generate_password
from pasties.db.repositories.paste_repository import PasteRepository
from pasties.domains.pastes.entities import CreatedPaste, Paste, RenderedPaste
from pasties.domains.pastes.errors import InvalidContent, Unauthorized
from pasties.domains.pastes.rendering import render_markdown
from pasties.domains.pastes.slugs import SlugAllocator

logger = logging.getLogger(__name__)


class PasteService:
    """Сервис жизненного цикла паст.

    Не хранит состояния кроме ссылок на хранилище и вспомогательные объекты;
    атомарность и сериализацию изменений одного slug обеспечивает хранилище.
    """

    def __init__(
        self,
        repository: PasteRepository,
        allocator: SlugAllocator,
        guard: CredentialGuard,
        content_max_length: int = 200_000,
        empty_password_policy: str = "allow",
    ):
        self.repository = repository
        self.allocator = allocator
        self.guard = guard
        self.content_max_length = content_max_length
        self.empty_password_policy = empty_password_policy

    @classmethod
    def from_settings(
        cls,
        session_factory: async_sessionmaker,
        settings: Settings,
        guard: Optional[CredentialGuard] = None,
    ) -> "PasteService":
        return cls(
            repository=PasteRepository(session_factory),
            allocator=SlugAllocator(
                length=settings.slug_length,
                max_attempts=settings.slug_max_attempts,
                max_length=settings.slug_max_length,
                reserved=settings.reserved_slugs,
            ),
            guard=guard or CredentialGuard.from_settings(settings),
            content_max_length=settings.content_max_length,
            empty_password_policy=settings.empty_password_policy,
        )

    async def create_paste(
        self,
        content: str,
        password: str = "",
        slug: Optional[str] = None,
    ) -> CreatedPaste:
        """Создание пасты. Без slug он генерируется; занятый пользовательский slug - ошибка"""
        self._check_content(content)
        if slug is not None:
            self.allocator.validate(slug)

        generated_password = None
        if not password and self.empty_password_policy == "generate":
            password = generated_password = generate_password()
        password_hash = await self.guard.hash_async(password)

        if slug is not None:
            paste = await self.repository.create(slug, content, password_hash)
        else:
            paste = await self.allocator.allocate(
                lambda candidate: self.repository.create(candidate, content, password_hash)
            )

        logger.info(f"Paste {paste.slug} created ({len(content)} chars)")
        return CreatedPaste(slug=paste.slug, generated_password=generated_password)

    async def get_paste(self, slug: str) -> RenderedPaste:
        """Получение пасты вместе с HTML"""
        paste = await self.repository.get(slug)
        html = await asyncio.to_thread(render_markdown, paste.content)
        return RenderedPaste(paste=paste, html=html)

    async def render_preview(self, content: str) -> str:
        """Предпросмотр несохранённого текста: без хранилища и без авторизации"""
        return await asyncio.to_thread(render_markdown, content)

    async def update_paste(
        self,
        slug: str,
        password: str,
        new_slug: Optional[str] = None,
        content: Optional[str] = None,
        new_password: Optional[str] = None,
    ) -> Paste:
        """Обновление пасты. Не переданные поля остаются без изменений"""
        paste = await self._authorize(slug, password)

        if content is not None:
            self._check_content(content)
        if new_slug == slug:
            new_slug = None
        if new_slug is not None:
            self.allocator.validate(new_slug)
        new_hash = None
        if new_password is not None:
            new_hash = await self.guard.hash_async(new_password)

        if new_slug is None and content is None and new_hash is None:
            return paste

        updated = await self.repository.update(
            slug,
            new_slug=new_slug,
            content=content,
            password_hash=new_hash,
            expected_hash=paste.password_hash,
        )
        if new_slug is not None:
            logger.info(f"Paste {slug} updated and moved to {new_slug}")
        else:
            logger.info(f"Paste {slug} updated")
        return updated

    async def delete_paste(self, slug: str, password: str) -> None:
        """Удаление пасты (сразу и окончательно)"""
        paste = await self._authorize(slug, password)
        await self.repository.delete(slug, expected_hash=paste.password_hash)
        logger.info(f"Paste {slug} deleted")

    async def _authorize(self, slug: str, password: str) -> Paste:
        """Единая проверка пароля перед любым изменением"""
        paste = await self.repository.get(slug)
        if not await self.guard.verify_async(password, paste.password_hash):
            logger.info(f"Rejected change of paste {slug}: wrong password")
            raise Unauthorized()
        return paste

    def _check_content(self, content: str) -> None:
        if not content or len(content.encode("utf-8")) > self.content_max_length:
            raise InvalidContent()

from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import delete, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from pasties.db.models.paste import PasteModel
from pasties.domains.pastes.entities import Paste, utcnow
from pasties.domains.pastes.errors import NotFound, SlugTaken, Unauthorized


def _as_utc(value: datetime) -> datetime:
    # SQLite не хранит часовой пояс
    if value is not None and value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


class PasteRepository:
    """Хранилище паст: slug -> запись.

    Каждая операция выполняется одним SQL-выражением в собственной транзакции:
    уникальность slug обеспечивает ограничение UNIQUE, а условия WHERE
    делают update/delete атомарными относительно конкурентных вызовов.
    """

    def __init__(self, session_factory: async_sessionmaker):
        self.session_factory = session_factory

    async def create(self, slug: str, content: str, password_hash: str) -> Paste:
        """Вставка новой пасты; SlugTaken, если slug уже занят"""
        now = utcnow()
        db_paste = PasteModel(
            slug=slug,
            content=content,
            password_hash=password_hash,
            created_at=now,
            edited_at=now,
        )

        async with self.session_factory() as session:
            session.add(db_paste)
            try:
                await session.commit()
            except IntegrityError:
                await session.rollback()
                raise SlugTaken()
            return self._to_domain(db_paste)

    async def get(self, slug: str) -> Paste:
        async with self.session_factory() as session:
            db_paste = await self._get_model(session, slug)
            if db_paste is None:
                raise NotFound()
            return self._to_domain(db_paste)

    async def update(
        self,
        slug: str,
        new_slug: Optional[str] = None,
        content: Optional[str] = None,
        password_hash: Optional[str] = None,
        expected_hash: Optional[str] = None,
    ) -> Paste:
        """Атомарное обновление пасты.

        Смена slug, содержимого и хеша пароля происходит одним UPDATE: при
        конфликте slug запись остаётся нетронутой под старым ключом.
        Если передан expected_hash, запись обновляется только пока её хеш
        не изменился (иначе Unauthorized).
        """
        values = {"edited_at": utcnow()}
        if new_slug is not None:
            values["slug"] = new_slug
        if content is not None:
            values["content"] = content
        if password_hash is not None:
            values["password_hash"] = password_hash

        stmt = update(PasteModel).where(PasteModel.slug == slug)
        if expected_hash is not None:
            stmt = stmt.where(PasteModel.password_hash == expected_hash)
        stmt = stmt.values(**values).execution_options(synchronize_session=False)

        async with self.session_factory() as session:
            try:
                result = await session.execute(stmt)
            except IntegrityError:
                await session.rollback()
                raise SlugTaken()

            if result.rowcount == 0:
                await session.rollback()
                await self._raise_missing(session, slug)

            db_paste = await self._get_model(session, values.get("slug", slug))
            await session.commit()
            return self._to_domain(db_paste)

    async def delete(self, slug: str, expected_hash: Optional[str] = None) -> None:
        stmt = delete(PasteModel).where(PasteModel.slug == slug)
        if expected_hash is not None:
            stmt = stmt.where(PasteModel.password_hash == expected_hash)

        async with self.session_factory() as session:
            result = await session.execute(stmt)
            if result.rowcount == 0:
                await session.rollback()
                await self._raise_missing(session, slug)
            await session.commit()

    async def _raise_missing(self, session: AsyncSession, slug: str) -> None:
        """Условное выражение не затронуло строк: паста удалена или пароль сменился"""
        if await self._get_model(session, slug) is None:
            raise NotFound()
        raise Unauthorized()

    async def _get_model(self, session: AsyncSession, slug: str) -> Optional[PasteModel]:
        result = await session.execute(select(PasteModel).where(PasteModel.slug == slug))
        return result.scalar_one_or_none()

    def _to_domain(self, db_paste: PasteModel) -> Paste:
        """Преобразование модели БД в доменную сущность"""
        return Paste(
            slug=db_paste.slug,
            content=db_paste.content,
            password_hash=db_paste.password_hash,
            created_at=_as_utc(db_paste.created_at),
            edited_at=_as_utc(db_paste.edited_at),
        )

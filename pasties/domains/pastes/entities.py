from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Optional


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class Paste:
    """Сущность пасты: содержимое и хеш пароля редактирования"""

    slug: str
    content: str
    password_hash: str
    created_at: datetime = field(default_factory=utcnow)
    edited_at: Optional[datetime] = None

    def __post_init__(self):
        if self.edited_at is None:
            self.edited_at = self.created_at

    def __repr__(self) -> str:
        # Хеш пароля не попадает в логи
        return f"Paste(slug={self.slug!r}, length={len(self.content)}, created_at={self.created_at})"


@dataclass
class RenderedPaste:
    """Паста вместе с отрендеренным HTML: редактору нужен исходник, просмотру HTML"""

    paste: Paste
    html: str


@dataclass
class CreatedPaste:
    slug: str
    # Заполняется только если пароль был сгенерирован сервером
    generated_password: Optional[str] = None

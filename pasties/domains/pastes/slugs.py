import logging
import re
import secrets
import string
from typing import Awaitable, Callable, Iterable, TypeVar

from pasties.domains.pastes.errors import AllocationExhausted, InvalidSlug, SlugTaken

logger = logging.getLogger(__name__)

T = TypeVar("T")

ALPHABET = string.ascii_letters + string.digits
URL_SAFE_RE = re.compile(r"^[A-Za-z0-9_-]+$")


class SlugAllocator:
    """Генерация и проверка коротких URL-ключей паст"""

    def __init__(
        self,
        length: int = 8,
        max_attempts: int = 10,
        max_length: int = 250,
        reserved: Iterable[str] = (),
    ):
        self.length = length
        self.max_attempts = max_attempts
        self.max_length = max_length
        self.reserved = frozenset(word.lower() for word in reserved)

    def generate(self) -> str:
        return "".join(secrets.choice(ALPHABET) for _ in range(self.length))

    def validate(self, candidate: str) -> str:
        """Проверка пользовательского slug. Уникальность не проверяется: это делает хранилище при записи"""
        if not candidate or len(candidate) > self.max_length:
            raise InvalidSlug()
        if not URL_SAFE_RE.match(candidate):
            raise InvalidSlug()
        if candidate.lower() in self.reserved:
            raise InvalidSlug(f"The URL '{candidate}' is reserved")
        return candidate

    async def allocate(self, claim: Callable[[str], Awaitable[T]]) -> T:
        """Генерирует slug и пытается занять его через claim, повторяя при SlugTaken"""
        for attempt in range(1, self.max_attempts + 1):
            slug = self.generate()
            try:
                return await claim(slug)
            except SlugTaken:
                logger.info(f"Generated slug collided, retrying (attempt {attempt}/{self.max_attempts})")
        logger.warning(f"Slug allocation exhausted after {self.max_attempts} attempts")
        raise AllocationExhausted()

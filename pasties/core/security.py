import asyncio
import secrets

from passlib.context import CryptContext

from pasties.config import Settings

GENERATED_PASSWORD_BYTES = 12


class CredentialGuard:
    """Хеширование и проверка паролей редактирования паст.

    Используется argon2 (медленный memory-hard KDF). Соль генерируется заново
    при каждом хешировании и хранится внутри строки хеша, поэтому отдельного
    хранения соли не требуется. Сравнение дайджестов выполняет argon2-cffi
    за постоянное время.
    """

    def __init__(self, time_cost: int = 2, memory_cost: int = 19 * 1024, parallelism: int = 1):
        # Контекст для хеширования паролей
        self.pwd_context = CryptContext(
            schemes=["argon2"],
            deprecated="auto",
            argon2__time_cost=time_cost,
            argon2__memory_cost=memory_cost,
            argon2__parallelism=parallelism,
        )

    @classmethod
    def from_settings(cls, settings: Settings) -> "CredentialGuard":
        return cls(
            time_cost=settings.argon2_time_cost,
            memory_cost=settings.argon2_memory_cost,
            parallelism=settings.argon2_parallelism,
        )

    def hash(self, password: str) -> str:
        """Хеширование пароля (пустая строка тоже хешируется)"""
        return self.pwd_context.hash(password)

    def verify(self, password: str, stored_hash: str) -> bool:
        """Проверка пароля; повреждённый хеш считается несовпадением"""
        try:
            return self.pwd_context.verify(password, stored_hash)
        except (ValueError, TypeError):
            return False

    # KDF нагружает CPU, поэтому в async-коде он выполняется в пуле потоков
    async def hash_async(self, password: str) -> str:
        return await asyncio.to_thread(self.hash, password)

    async def verify_async(self, password: str, stored_hash: str) -> bool:
        return await asyncio.to_thread(self.verify, password, stored_hash)


def generate_password() -> str:
    """Случайный пароль для паст, созданных без пароля"""
    return secrets.token_urlsafe(GENERATED_PASSWORD_BYTES)

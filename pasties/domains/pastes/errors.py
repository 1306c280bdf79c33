from typing import Optional


class PasteError(Exception):
    """Базовая ошибка операций с пастами"""

    code = "paste_error"
    message = "An unspecified error occurred with the paste manager"

    def __init__(self, message: Optional[str] = None):
        super().__init__(message or self.message)
        self.message = message or self.message


class InvalidSlug(PasteError):
    code = "invalid_slug"
    message = "The specified URL is invalid, or is the wrong length"


class InvalidContent(PasteError):
    code = "invalid_content"
    message = "The specified content is invalid, or is the wrong length"


class SlugTaken(PasteError):
    code = "slug_taken"
    message = "A paste with this URL already exists"


class NotFound(PasteError):
    code = "not_found"
    message = "No paste with this URL has been found"


class Unauthorized(PasteError):
    code = "unauthorized"
    message = "The specified password is incorrect"


class AllocationExhausted(PasteError):
    """Не удалось подобрать свободный slug: ошибка сервера, а не пользователя"""

    code = "allocation_exhausted"
    message = "Could not allocate a free URL for the paste"

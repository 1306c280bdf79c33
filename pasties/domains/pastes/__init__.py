from pasties.domains.pastes.entities import CreatedPaste, Paste, RenderedPaste
from pasties.domains.pastes.errors import (
    AllocationExhausted, InvalidContent, InvalidSlug, NotFound, PasteError,
    SlugTaken, Unauthorized
)
from pasties.domains.pastes.rendering import render_markdown
from pasties.domains.pastes.slugs import SlugAllocator

# PasteService: pasties.domains.pastes.services (зависит от db.repositories)

__all__ = [
    "CreatedPaste", "Paste", "RenderedPaste",
    "AllocationExhausted", "InvalidContent", "InvalidSlug", "NotFound", "PasteError",
    "SlugTaken", "Unauthorized",
    "render_markdown",
    "SlugAllocator"
]

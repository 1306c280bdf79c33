from pasties.db.repositories.paste_repository import PasteRepository

__all__ = ["PasteRepository"]

from pasties.db.models.paste import PasteModel

__all__ = ["PasteModel"]

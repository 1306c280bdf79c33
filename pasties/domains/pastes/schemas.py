from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


def _blank_to_none(v):
    # Пустое поле формы означает «не задано»
    if isinstance(v, str) and v == "":
        return None
    return v


class PasteCreate(BaseModel):
    """Схема для создания пасты"""
    content: str
    password: str = ""
    slug: Optional[str] = None

    @field_validator("slug", mode="before")
    @classmethod
    def validate_slug(cls, v):
        return _blank_to_none(v)


class PasteCreated(BaseModel):
    slug: str
    password: Optional[str] = None


class PasteUpdate(BaseModel):
    """Схема для обновления пасты"""
    password: str = ""
    content: Optional[str] = None
    new_slug: Optional[str] = None
    new_password: Optional[str] = None

    @field_validator("new_slug", "new_password", mode="before")
    @classmethod
    def validate_optional(cls, v):
        return _blank_to_none(v)


class PasteDelete(BaseModel):
    password: str = ""


class PasteSummary(BaseModel):
    """Паста без содержимого и без хеша пароля"""
    slug: str
    created_at: datetime
    edited_at: datetime

    model_config = ConfigDict(from_attributes=True)


class PasteResponse(PasteSummary):
    """Исходник для редактора и HTML для просмотра"""
    content: str
    html: str


class RenderRequest(BaseModel):
    content: str = Field(default="")

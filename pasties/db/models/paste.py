from sqlalchemy import Column, DateTime, Integer, String, Text

from pasties.core.db import Base


class PasteModel(Base):
    __tablename__ = "pastes"

    id = Column(Integer, primary_key=True)
    slug = Column(String(255), unique=True, index=True, nullable=False)
    content = Column(Text, nullable=False)
    password_hash = Column(String(255), nullable=False)
    created_at = Column(DateTime(timezone=True), nullable=False)
    edited_at = Column(DateTime(timezone=True), nullable=False)

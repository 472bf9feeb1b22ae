"""User ORM model — account plus the user's encrypted AI credential."""

import uuid
from datetime import datetime

from sqlalchemy import DateTime, String, Text, func
from sqlalchemy.orm import Mapped, mapped_column

from fridgechef.database import Base
from fridgechef.schemas.credential import LEGACY_MODEL, LEGACY_PROVIDER


class User(Base):
    __tablename__ = "users"

    id: Mapped[str] = mapped_column(String(64), primary_key=True, default=lambda: uuid.uuid4().hex)
    name: Mapped[str] = mapped_column(String(50))
    email: Mapped[str] = mapped_column(String(254), unique=True, index=True)

    # AI credential — provider/model/key are always written together
    ai_provider: Mapped[str] = mapped_column(String(32), default=LEGACY_PROVIDER.value)
    ai_model: Mapped[str] = mapped_column(String(128), default=LEGACY_MODEL)
    ai_api_key: Mapped[str | None] = mapped_column(Text, nullable=True)  # salt:nonce:tag:ct
    # Legacy Gemini-only key, read as a fallback
    gemini_api_key: Mapped[str | None] = mapped_column(Text, nullable=True)

    created_at: Mapped[datetime] = mapped_column(DateTime, server_default=func.now())
    updated_at: Mapped[datetime] = mapped_column(
        DateTime, server_default=func.now(), onupdate=func.now()
    )

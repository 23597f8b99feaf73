from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, Integer, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.db.base import Base
from app.models.common import TimestampMixin, UUIDPrimaryKeyMixin


class TrainingMessage(UUIDPrimaryKeyMixin, TimestampMixin, Base):
    __tablename__ = "training_messages"

    memory_profile_id: Mapped[str] = mapped_column(
        ForeignKey("memory_profiles.id", ondelete="CASCADE"), nullable=False, index=True
    )
    original_timestamp: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, index=True)
    encrypted_content: Mapped[str] = mapped_column(Text, nullable=False)
    message_order: Mapped[int] = mapped_column(Integer, nullable=False)

    memory_profile = relationship("MemoryProfile", back_populates="training_messages")

from sqlalchemy import JSON, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.orm import relationship as orm_relationship

from app.db.base import Base
from app.models.common import TimestampMixin, UUIDPrimaryKeyMixin


class MemoryProfile(UUIDPrimaryKeyMixin, TimestampMixin, Base):
    __tablename__ = "memory_profiles"

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    relationship: Mapped[str | None] = mapped_column(String(255), nullable=True)
    training_status: Mapped[str] = mapped_column(String(32), default="pending", nullable=False, index=True)
    total_messages: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    date_range_start: Mapped[str | None] = mapped_column(String(10), nullable=True)
    date_range_end: Mapped[str | None] = mapped_column(String(10), nullable=True)

    average_message_length: Mapped[int | None] = mapped_column(Integer, nullable=True)
    common_words: Mapped[list] = mapped_column(JSON, default=list, nullable=False)
    emoticons_used: Mapped[list] = mapped_column(JSON, default=list, nullable=False)
    communication_patterns: Mapped[list] = mapped_column(JSON, default=list, nullable=False)
    punctuation_style: Mapped[list] = mapped_column(JSON, default=list, nullable=False)
    capitalization_style: Mapped[str | None] = mapped_column(String(32), nullable=True)
    greeting_patterns: Mapped[list] = mapped_column(JSON, default=list, nullable=False)
    farewell_patterns: Mapped[list] = mapped_column(JSON, default=list, nullable=False)
    question_style: Mapped[list] = mapped_column(JSON, default=list, nullable=False)
    response_style: Mapped[list] = mapped_column(JSON, default=list, nullable=False)
    typical_phrases: Mapped[list] = mapped_column(JSON, default=list, nullable=False)
    message_timing: Mapped[list] = mapped_column(JSON, default=list, nullable=False)

    training_messages = orm_relationship(
        "TrainingMessage",
        back_populates="memory_profile",
        cascade="all, delete-orphan",
    )

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from datetime import datetime, timezone

from sqlalchemy import select
from sqlalchemy.orm import Session

from app.core.security import decrypt_text, encrypt_text
from app.models.memory_profile import MemoryProfile
from app.models.training_message import TrainingMessage
from app.services.parsing import ParsedChat, ParsedMessage, get_messages_by_person
from app.services.profiling import StyleProfile, get_person_communication_style

logger = logging.getLogger(__name__)

UPDATABLE_FIELDS = {"name", "description", "relationship", "training_status"}
TRAINING_STATUSES = {"pending", "completed"}


class ProfileNotFoundError(LookupError):
    pass


@dataclass(slots=True)
class TrainingMessageView:
    id: str
    original_timestamp: datetime
    content: str
    message_order: int


def create_memory_profile(
    db: Session,
    *,
    name: str,
    description: str | None = None,
    relationship: str | None = None,
    style: StyleProfile | None = None,
    total_messages: int = 0,
    date_range_start: str | None = None,
    date_range_end: str | None = None,
) -> MemoryProfile:
    profile = _add_profile(
        db,
        name=name,
        description=description,
        relationship=relationship,
        style=style,
        total_messages=total_messages,
        date_range_start=date_range_start,
        date_range_end=date_range_end,
    )
    db.commit()
    db.refresh(profile)
    logger.info("memory_profile_created", extra={"profile_id": profile.id, "total_messages": total_messages})
    return profile


def get_memory_profile(db: Session, profile_id: str) -> MemoryProfile | None:
    return db.scalar(select(MemoryProfile).where(MemoryProfile.id == profile_id))


def list_memory_profiles(db: Session) -> list[MemoryProfile]:
    return list(db.scalars(select(MemoryProfile).order_by(MemoryProfile.created_at.desc())).all())


def update_memory_profile(db: Session, profile_id: str, **updates) -> MemoryProfile:
    unknown = set(updates) - UPDATABLE_FIELDS
    if unknown:
        raise ValueError(f"Fields cannot be updated: {', '.join(sorted(unknown))}")
    if "training_status" in updates and updates["training_status"] not in TRAINING_STATUSES:
        raise ValueError(f"Unsupported training status: {updates['training_status']}")
    if "name" in updates and not updates["name"]:
        raise ValueError("Profile name cannot be empty")

    profile = get_memory_profile(db, profile_id)
    if not profile:
        raise ProfileNotFoundError(profile_id)
    for key, value in updates.items():
        setattr(profile, key, value)
    db.add(profile)
    db.commit()
    db.refresh(profile)
    return profile


def delete_memory_profile(db: Session, profile_id: str) -> None:
    profile = get_memory_profile(db, profile_id)
    if not profile:
        raise ProfileNotFoundError(profile_id)
    db.delete(profile)
    db.commit()
    logger.info("memory_profile_deleted", extra={"profile_id": profile_id})


def save_training_messages(db: Session, profile_id: str, messages: Sequence[ParsedMessage]) -> int:
    _add_training_messages(db, profile_id, messages)
    db.commit()
    return len(messages)


def get_training_messages(db: Session, profile_id: str) -> list[TrainingMessageView]:
    rows = db.scalars(
        select(TrainingMessage)
        .where(TrainingMessage.memory_profile_id == profile_id)
        .order_by(TrainingMessage.original_timestamp.asc(), TrainingMessage.message_order.asc())
    ).all()
    return [
        TrainingMessageView(
            id=row.id,
            original_timestamp=row.original_timestamp,
            content=decrypt_text(row.encrypted_content),
            message_order=row.message_order,
        )
        for row in rows
    ]


def create_profile_from_chat(
    db: Session,
    chat: ParsedChat,
    *,
    person_name: str,
    name: str,
    description: str | None = None,
    relationship: str | None = None,
) -> MemoryProfile:
    """Profile one participant of a parsed export and store their messages."""
    person_messages = get_messages_by_person(chat, person_name)
    if not person_messages:
        raise ValueError(f"No messages found for participant: {person_name}")

    style = get_person_communication_style(person_messages)
    try:
        profile = _add_profile(
            db,
            name=name,
            description=description,
            relationship=relationship,
            style=style,
            total_messages=len(person_messages),
            date_range_start=_as_utc(person_messages[0].timestamp).date().isoformat(),
            date_range_end=_as_utc(person_messages[-1].timestamp).date().isoformat(),
        )
        _add_training_messages(db, profile.id, person_messages)
        profile.training_status = "completed"
        db.commit()
    except Exception:
        db.rollback()
        raise
    db.refresh(profile)
    logger.info("memory_profile_created", extra={"profile_id": profile.id, "total_messages": len(person_messages)})
    return profile


def _add_profile(
    db: Session,
    *,
    style: StyleProfile | None,
    **fields,
) -> MemoryProfile:
    profile = MemoryProfile(training_status="pending", **fields, **(style.to_record() if style else {}))
    db.add(profile)
    db.flush()
    return profile


def _add_training_messages(db: Session, profile_id: str, messages: Sequence[ParsedMessage]) -> None:
    for index, message in enumerate(messages):
        db.add(
            TrainingMessage(
                memory_profile_id=profile_id,
                original_timestamp=_as_utc(message.timestamp),
                encrypted_content=encrypt_text(message.content),
                message_order=index,
            )
        )
    db.flush()


def _as_utc(value: datetime) -> datetime:
    # Naive parser timestamps are local calendar time.
    return value.astimezone(timezone.utc)

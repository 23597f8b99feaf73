from datetime import datetime, timedelta, timezone

import pytest
from sqlalchemy import select

from app.models.training_message import TrainingMessage
from app.services.parsing import ParsedMessage, parse_whatsapp_txt
from app.services.profiles import (
    ProfileNotFoundError,
    create_memory_profile,
    create_profile_from_chat,
    delete_memory_profile,
    get_memory_profile,
    get_training_messages,
    list_memory_profiles,
    save_training_messages,
    update_memory_profile,
)
from app.services.profiling import get_person_communication_style


def test_create_and_fetch_profile(db):
    messages = [ParsedMessage(timestamp=datetime(2023, 2, 1, 9, 30, tzinfo=timezone.utc), sender="Alice", content="hey hey")]
    style = get_person_communication_style(messages)
    profile = create_memory_profile(db, name="Alice", relationship="friend", style=style, total_messages=1)

    fetched = get_memory_profile(db, profile.id)
    assert fetched is not None
    assert fetched.name == "Alice"
    assert fetched.relationship == "friend"
    assert fetched.training_status == "pending"
    assert fetched.average_message_length == 7
    assert fetched.greeting_patterns == ["hey"]
    assert fetched.capitalization_style == "mostly lowercase"


def test_get_missing_profile_returns_none(db):
    assert get_memory_profile(db, "missing") is None


def test_training_messages_are_encrypted_and_ordered_by_timestamp(db):
    profile = create_memory_profile(db, name="Bob")
    base = datetime(2023, 2, 1, 9, 0, tzinfo=timezone.utc)
    messages = [
        ParsedMessage(timestamp=base + timedelta(minutes=5), sender="Bob", content="second"),
        ParsedMessage(timestamp=base, sender="Bob", content="first"),
        ParsedMessage(timestamp=base + timedelta(minutes=5), sender="Bob", content="third"),
    ]
    assert save_training_messages(db, profile.id, messages) == 3

    stored = db.scalars(select(TrainingMessage)).all()
    assert all("first" not in row.encrypted_content for row in stored)

    fetched = get_training_messages(db, profile.id)
    assert [m.content for m in fetched] == ["first", "second", "third"]
    assert [m.message_order for m in fetched] == [1, 0, 2]


def test_update_profile(db):
    profile = create_memory_profile(db, name="Bob")
    updated = update_memory_profile(db, profile.id, description="old friend", training_status="completed")
    assert updated.description == "old friend"
    assert updated.training_status == "completed"


def test_update_rejects_unknown_fields_and_statuses(db):
    profile = create_memory_profile(db, name="Bob")
    with pytest.raises(ValueError):
        update_memory_profile(db, profile.id, common_words=["x"])
    with pytest.raises(ValueError):
        update_memory_profile(db, profile.id, training_status="training")
    with pytest.raises(ValueError):
        update_memory_profile(db, profile.id, training_status=None)
    with pytest.raises(ValueError):
        update_memory_profile(db, profile.id, name="")


def test_update_missing_profile(db):
    with pytest.raises(ProfileNotFoundError):
        update_memory_profile(db, "missing", name="x")


def test_delete_profile_removes_training_messages(db):
    profile = create_memory_profile(db, name="Bob")
    save_training_messages(
        db, profile.id, [ParsedMessage(timestamp=datetime(2023, 2, 1, tzinfo=timezone.utc), sender="Bob", content="hi")]
    )
    delete_memory_profile(db, profile.id)
    assert get_memory_profile(db, profile.id) is None
    assert db.scalars(select(TrainingMessage)).all() == []
    with pytest.raises(ProfileNotFoundError):
        delete_memory_profile(db, profile.id)


def test_list_profiles(db):
    create_memory_profile(db, name="One")
    create_memory_profile(db, name="Two")
    assert {p.name for p in list_memory_profiles(db)} == {"One", "Two"}


def test_create_profile_from_chat(db, whatsapp_export):
    chat = parse_whatsapp_txt(str(whatsapp_export), "UTC")
    profile = create_profile_from_chat(db, chat, person_name="bob", name="Bobby", relationship="brother")

    assert profile.training_status == "completed"
    assert profile.total_messages == 2
    assert profile.date_range_start == "2023-02-01"
    assert profile.date_range_end == "2023-02-01"
    assert "often uses laughter expressions" in profile.communication_patterns

    messages = get_training_messages(db, profile.id)
    assert [m.content for m in messages] == ["good thanks, what about you?", "haha see you later at the park then"]


def test_create_profile_from_chat_unknown_person(db, whatsapp_export):
    chat = parse_whatsapp_txt(str(whatsapp_export), "UTC")
    with pytest.raises(ValueError):
        create_profile_from_chat(db, chat, person_name="Carol", name="Carol")
    assert list_memory_profiles(db) == []


def test_create_profile_from_chat_rolls_back_on_failure(db, whatsapp_export, monkeypatch):
    chat = parse_whatsapp_txt(str(whatsapp_export), "UTC")

    def fail(_text):
        raise RuntimeError("encryption unavailable")

    monkeypatch.setattr("app.services.profiles.encrypt_text", fail)
    with pytest.raises(RuntimeError):
        create_profile_from_chat(db, chat, person_name="Bob", name="Bob")
    assert list_memory_profiles(db) == []
    assert db.scalars(select(TrainingMessage)).all() == []

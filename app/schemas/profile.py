from datetime import datetime
from typing import Literal

from pydantic import BaseModel, Field


class MemoryProfileRead(BaseModel):
    id: str
    name: str
    description: str | None
    relationship: str | None
    training_status: str
    total_messages: int
    date_range_start: str | None
    date_range_end: str | None
    average_message_length: int | None
    common_words: list[str] = Field(default_factory=list)
    emoticons_used: list[str] = Field(default_factory=list)
    communication_patterns: list[str] = Field(default_factory=list)
    punctuation_style: list[str] = Field(default_factory=list)
    capitalization_style: str | None
    greeting_patterns: list[str] = Field(default_factory=list)
    farewell_patterns: list[str] = Field(default_factory=list)
    question_style: list[str] = Field(default_factory=list)
    response_style: list[str] = Field(default_factory=list)
    typical_phrases: list[str] = Field(default_factory=list)
    message_timing: list[str] = Field(default_factory=list)
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class MemoryProfileUpdate(BaseModel):
    name: str | None = Field(default=None, min_length=1, max_length=255)
    description: str | None = None
    relationship: str | None = Field(default=None, max_length=255)
    training_status: Literal["pending", "completed"] | None = None


class TrainingMessageRead(BaseModel):
    id: str
    original_timestamp: datetime
    content: str
    message_order: int

    model_config = {"from_attributes": True}


class PersonaPromptRead(BaseModel):
    profile_id: str
    prompt: str

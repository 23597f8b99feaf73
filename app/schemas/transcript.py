from pydantic import BaseModel


class TranscriptPreview(BaseModel):
    participants: list[str]
    message_count: dict[str, int]
    total_messages: int

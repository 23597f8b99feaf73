from dataclasses import dataclass, field
from datetime import datetime


@dataclass(frozen=True, slots=True)
class ParsedMessage:
    timestamp: datetime
    sender: str
    content: str
    is_system_message: bool = False


@dataclass(slots=True)
class ParsedChat:
    """Messages of one export, system lines already filtered out.

    ``message_count`` is tallied before that filter runs, so a sender's count
    includes their system lines (media placeholders, deletion notices).
    """

    messages: list[ParsedMessage] = field(default_factory=list)
    participants: list[str] = field(default_factory=list)
    message_count: dict[str, int] = field(default_factory=dict)

    def summary(self) -> dict:
        return {
            "message_count": len(self.messages),
            "participant_count": len(self.participants),
            "parser": "whatsapp_txt",
        }

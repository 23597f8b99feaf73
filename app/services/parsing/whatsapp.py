import logging
import re
from dataclasses import dataclass
from datetime import datetime, timedelta
from pathlib import Path
from zoneinfo import ZoneInfo

from app.services.parsing.types import ParsedChat, ParsedMessage

logger = logging.getLogger(__name__)

WHATSAPP_LINE_RE = re.compile(r"^\[(\d{2})/(\d{2})/(\d{4}), (\d{2}):(\d{2}):(\d{2})\] ([^:]+): (.*)$")

SYSTEM_MARKERS = (
    "messages and calls are end-to-end encrypted",
    "image omitted",
    "document omitted",
    "video omitted",
    "audio omitted",
    "gif omitted",
    "sticker omitted",
    "you deleted this message",
    "this message was deleted",
)


@dataclass(slots=True)
class _OpenMessage:
    timestamp: datetime
    sender: str
    content: str
    is_system_message: bool

    def freeze(self) -> ParsedMessage:
        return ParsedMessage(
            timestamp=self.timestamp,
            sender=self.sender,
            content=self.content,
            is_system_message=self.is_system_message,
        )


def is_system_message(content: str) -> bool:
    lowered = content.lower()
    return any(marker in lowered for marker in SYSTEM_MARKERS)


def _parse_ts(groups: tuple[str, ...], tz: ZoneInfo | None) -> datetime:
    """Build a timestamp, rolling out-of-range fields over (31/02 is 3 March)."""
    day, month, year, hour, minute, second = (int(value) for value in groups)
    if year < 100:
        year += 1900
    year, month_index = divmod(year * 12 + month - 1, 12)
    try:
        start = datetime(year, month_index + 1, 1, tzinfo=tz)
        return start + timedelta(days=day - 1, hours=hour, minutes=minute, seconds=second)
    except (ValueError, OverflowError):
        return datetime.max.replace(tzinfo=tz)


def parse_export(text: str, timezone_name: str | None = None) -> ParsedChat:
    """Split a WhatsApp export into messages.

    Lines without the ``[DD/MM/YYYY, HH:MM:SS] Sender: `` prefix continue the
    open message, or are dropped when nothing is open. Never raises on
    malformed lines.
    """
    finalized: list[ParsedMessage] = []
    participants: dict[str, None] = {}
    message_count: dict[str, int] = {}
    current: _OpenMessage | None = None
    tz = ZoneInfo(timezone_name) if timezone_name else None

    def _close(message: _OpenMessage) -> None:
        finalized.append(message.freeze())
        message_count[message.sender] = message_count.get(message.sender, 0) + 1

    for raw_line in text.split("\n"):
        if not raw_line.strip():
            continue
        line = raw_line.rstrip("\r")
        match = WHATSAPP_LINE_RE.match(line)
        if not match:
            if current is not None:
                current.content = f"{current.content}\n{line.strip()}"
            continue

        if current is not None:
            _close(current)

        sender, content = match.group(7), match.group(8)
        sender = sender.strip()
        system = is_system_message(content)
        if not system:
            participants.setdefault(sender, None)
        current = _OpenMessage(
            timestamp=_parse_ts(match.groups()[:6], tz),
            sender=sender,
            content=content.strip(),
            is_system_message=system,
        )

    if current is not None:
        _close(current)

    messages = [m for m in finalized if not m.is_system_message]
    logger.info(
        "whatsapp_export_parsed",
        extra={
            "message_count": len(messages),
            "system_message_count": len(finalized) - len(messages),
            "participant_count": len(participants),
        },
    )
    return ParsedChat(messages=messages, participants=list(participants), message_count=message_count)


def parse_whatsapp_txt(path: str, timezone_name: str | None = None) -> ParsedChat:
    raw = Path(path).read_text(encoding="utf-8", errors="replace")
    return parse_export(raw, timezone_name)


def get_messages_by_person(chat: ParsedChat, person_name: str) -> list[ParsedMessage]:
    wanted = person_name.lower()
    return [m for m in chat.messages if m.sender.lower() == wanted]

from dataclasses import asdict, dataclass, field


class EmptyMessagesError(ValueError):
    """Raised when a style profile is requested for zero messages."""


@dataclass(frozen=True, slots=True)
class StyleProfile:
    average_message_length: int
    common_words: list[str] = field(default_factory=list)
    emoticons_used: list[str] = field(default_factory=list)
    communication_patterns: list[str] = field(default_factory=list)
    punctuation_style: list[str] = field(default_factory=list)
    capitalization_style: str = "mixed case"
    greeting_patterns: list[str] = field(default_factory=list)
    farewell_patterns: list[str] = field(default_factory=list)
    question_style: list[str] = field(default_factory=list)
    response_style: list[str] = field(default_factory=list)
    typical_phrases: list[str] = field(default_factory=list)
    message_timing: list[str] = field(default_factory=list)

    def to_record(self) -> dict:
        return asdict(self)

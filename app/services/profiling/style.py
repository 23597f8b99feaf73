import math
import re
from collections import Counter
from collections.abc import Sequence

from app.services.parsing.types import ParsedMessage
from app.services.profiling.types import EmptyMessagesError, StyleProfile

STOP_WORDS = {"the", "and", "you", "for", "are", "but", "not", "can", "have", "that", "with"}
GREETINGS = ("hi", "hello", "hey", "good morning", "good evening", "sup", "wassup", "yo")
FAREWELLS = ("bye", "goodbye", "see you", "talk later", "ttyl", "good night", "goodnight", "take care")
QUESTION_WORDS = ("what", "how", "when", "where", "why", "who", "which")
LAUGHTER_MARKERS = ("ahah", "haha")

COMMON_WORDS_LIMIT = 20
TYPICAL_PHRASES_LIMIT = 5
MIN_TIMING_MESSAGES = 6

# emoticons, symbols & pictographs, transport, flags, misc symbols, dingbats
EMOTICON_RE = re.compile(
    "[\U0001F600-\U0001F64F\U0001F300-\U0001F5FF\U0001F680-\U0001F6FF\U0001F1E0-\U0001F1FF\u2600-\u26FF\u2700-\u27BF]"
)
# word characters are ASCII only, whitespace is not
WORD_CHAR = "[A-Za-z0-9_]"
NON_WORD_RE = re.compile(r"[^A-Za-z0-9_\s]")
ELLIPSIS_RE = re.compile(r"\.{2,}")
UPPER_RE = re.compile(r"[A-Z]")
LETTER_RE = re.compile(r"[a-zA-Z]")
PHRASE_RE = re.compile(rf"(?<!{WORD_CHAR}){WORD_CHAR}+\s+{WORD_CHAR}+\s+{WORD_CHAR}+(?!{WORD_CHAR})")


def get_person_communication_style(messages: Sequence[ParsedMessage]) -> StyleProfile:
    """Describe how one speaker writes, from their messages in transcript order.

    Raises EmptyMessagesError for an empty sequence.
    """
    if not messages:
        raise EmptyMessagesError("Cannot build a communication style from zero messages.")

    all_text = " ".join(m.content for m in messages)
    emoticons = extract_emoticons(all_text)
    average_length = sum(len(m.content) for m in messages) / len(messages)

    return StyleProfile(
        average_message_length=_round_half_up(average_length),
        common_words=common_words(all_text),
        emoticons_used=emoticons,
        communication_patterns=communication_patterns(messages, average_length, emoticons),
        punctuation_style=punctuation_style(all_text, len(messages)),
        capitalization_style=capitalization_style(all_text),
        greeting_patterns=_vocabulary_hits(all_text, GREETINGS),
        farewell_patterns=_vocabulary_hits(all_text, FAREWELLS),
        question_style=question_style(messages),
        response_style=response_style(messages),
        typical_phrases=typical_phrases(all_text),
        message_timing=message_timing(messages),
    )


def tokenize(all_text: str) -> list[str]:
    cleaned = NON_WORD_RE.sub(" ", all_text.lower())
    return [word for word in cleaned.split() if len(word) > 2]


def common_words(all_text: str) -> list[str]:
    counts = Counter(tokenize(all_text))
    ranked = [word for word, _ in counts.most_common() if word not in STOP_WORDS]
    return ranked[:COMMON_WORDS_LIMIT]


def extract_emoticons(all_text: str) -> list[str]:
    return list(dict.fromkeys(EMOTICON_RE.findall(all_text)))


def communication_patterns(messages: Sequence[ParsedMessage], average_length: float, emoticons: list[str]) -> list[str]:
    patterns: list[str] = []
    if average_length > 100:
        patterns.append("writes long messages")
    if average_length < 30:
        patterns.append("prefers short messages")
    if len(emoticons) > 10:
        patterns.append("uses many emojis")
    if any(marker in m.content for m in messages for marker in LAUGHTER_MARKERS):
        patterns.append("often uses laughter expressions")
    return patterns


def punctuation_style(all_text: str, message_count: int) -> list[str]:
    style: list[str] = []
    if all_text.count("!") > message_count * 0.3:
        style.append("uses many exclamation marks")
    if all_text.count("?") > message_count * 0.2:
        style.append("asks many questions")
    if len(ELLIPSIS_RE.findall(all_text)) > message_count * 0.1:
        style.append("uses ellipsis frequently")
    if all_text.count(".") < message_count * 0.1:
        style.append("rarely uses periods")
    if all_text.count(",") > message_count * 0.5:
        style.append("uses commas frequently")
    return style


def capitalization_style(all_text: str) -> str:
    letters = len(LETTER_RE.findall(all_text))
    if not letters:
        return "mixed case"
    ratio = len(UPPER_RE.findall(all_text)) / letters
    if ratio > 0.3:
        return "frequent capitals"
    if ratio < 0.05:
        return "mostly lowercase"
    return "mixed case"


def question_style(messages: Sequence[ParsedMessage]) -> list[str]:
    questions = [m.content.lower() for m in messages if "?" in m.content]
    return [f'asks "{word}" questions' for word in QUESTION_WORDS if any(word in q for q in questions)]


def response_style(messages: Sequence[ParsedMessage]) -> list[str]:
    style: list[str] = []
    short = sum(1 for m in messages if len(m.content) < 10)
    detailed = sum(1 for m in messages if len(m.content) > 100)
    if short > len(messages) * 0.3:
        style.append("gives short responses")
    if detailed > len(messages) * 0.2:
        style.append("gives detailed responses")
    return style


def typical_phrases(all_text: str) -> list[str]:
    counts = Counter(phrase.lower() for phrase in PHRASE_RE.findall(all_text))
    return [phrase for phrase, count in counts.most_common() if count >= 2][:TYPICAL_PHRASES_LIMIT]


def message_timing(messages: Sequence[ParsedMessage]) -> list[str]:
    if len(messages) < MIN_TIMING_MESSAGES:
        return []
    gaps = [
        (current.timestamp - previous.timestamp).total_seconds() / 60
        for previous, current in zip(messages, messages[1:])
    ]
    average_gap = sum(gaps) / len(gaps)
    if average_gap < 2:
        timing = ["responds very quickly"]
    elif average_gap < 30:
        timing = ["responds within minutes"]
    elif average_gap < 480:
        timing = ["responds within hours"]
    else:
        timing = ["responds after long delays"]
    if sum(1 for gap in gaps if gap < 1) > len(gaps) * 0.3:
        timing.append("sends messages in bursts")
    return timing


def _vocabulary_hits(all_text: str, vocabulary: tuple[str, ...]) -> list[str]:
    lowered = all_text.lower()
    return [term for term in vocabulary if term in lowered]


def _round_half_up(value: float) -> int:
    return math.floor(value + 0.5)

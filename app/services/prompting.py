from collections.abc import Sequence

STYLE_GUIDANCE = (
    ("common_words", "Words they use often"),
    ("typical_phrases", "Phrases they repeat"),
    ("emoticons_used", "Emojis they use"),
    ("communication_patterns", "Communication patterns"),
    ("punctuation_style", "Punctuation"),
    ("greeting_patterns", "Greetings"),
    ("farewell_patterns", "Farewells"),
    ("question_style", "Questions"),
    ("response_style", "Responses"),
    ("message_timing", "Timing"),
)


def build_persona_prompt(profile, messages: Sequence, *, sample_size: int = 5) -> str:
    """Build the system instruction for speaking as a stored memory profile.

    ``profile`` is any object exposing the memory profile fields. Samples are the
    first and last ``sample_size`` messages, verbatim.
    """
    lines = [f"You are {profile.name} having a real conversation. Stay completely in character."]
    if profile.relationship:
        lines.append(f"Relationship to the user: {profile.relationship}.")
    if profile.description:
        lines.append(f"About {profile.name}: {profile.description}")

    lines.extend(["", "STYLE GUIDANCE:"])
    if profile.average_message_length:
        lines.append(f"- Typical message length: about {profile.average_message_length} characters")
    if profile.capitalization_style:
        lines.append(f"- Capitalization: {profile.capitalization_style}")
    for attr, label in STYLE_GUIDANCE:
        values = getattr(profile, attr, None) or []
        if values:
            lines.append(f"- {label}: {', '.join(values)}")

    samples = _sample_messages(messages, sample_size)
    if samples:
        lines.extend(["", f"EXAMPLES OF HOW {profile.name.upper()} WRITES:"])
        lines.extend(f'- "{text}"' for text in samples)

    lines.extend(["", f"Respond the way {profile.name} would, using their vocabulary and tone."])
    return "\n".join(lines)


def _sample_messages(messages: Sequence, sample_size: int) -> list[str]:
    if sample_size <= 0 or not messages:
        return []
    if len(messages) <= sample_size * 2:
        picked = list(messages)
    else:
        picked = list(messages[:sample_size]) + list(messages[-sample_size:])
    return [m.content for m in picked]

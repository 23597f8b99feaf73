from app.schemas.profile import MemoryProfileRead, MemoryProfileUpdate, PersonaPromptRead, TrainingMessageRead
from app.schemas.transcript import TranscriptPreview

__all__ = [
    "MemoryProfileRead",
    "MemoryProfileUpdate",
    "TrainingMessageRead",
    "PersonaPromptRead",
    "TranscriptPreview",
]

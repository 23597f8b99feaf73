from app.models.memory_profile import MemoryProfile
from app.models.training_message import TrainingMessage

__all__ = ["MemoryProfile", "TrainingMessage"]

from app.services.profiling.style import get_person_communication_style
from app.services.profiling.types import EmptyMessagesError, StyleProfile

__all__ = ["EmptyMessagesError", "StyleProfile", "get_person_communication_style"]

from app.services.parsing.types import ParsedChat, ParsedMessage
from app.services.parsing.whatsapp import get_messages_by_person, parse_export, parse_whatsapp_txt

__all__ = ["ParsedChat", "ParsedMessage", "get_messages_by_person", "parse_export", "parse_whatsapp_txt"]

from zoneinfo import ZoneInfoNotFoundError

from fastapi import HTTPException, UploadFile, status

from app.services.parsing import ParsedChat, parse_export
from app.services.storage import read_upload_text


async def parse_uploaded_export(file: UploadFile, timezone_name: str) -> ParsedChat:
    text = await read_upload_text(file)
    try:
        parsed = parse_export(text, timezone_name or None)
    except (ValueError, ZoneInfoNotFoundError) as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=f"Unknown timezone: {timezone_name}") from exc
    if not parsed.participants:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail="No valid messages found in the export.",
        )
    return parsed

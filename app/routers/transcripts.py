import logging

from fastapi import APIRouter, File, Form, UploadFile

from app.routers.deps import parse_uploaded_export
from app.schemas.transcript import TranscriptPreview

router = APIRouter(prefix="/transcripts", tags=["transcripts"])
logger = logging.getLogger(__name__)


@router.post("/parse", response_model=TranscriptPreview)
async def parse_transcript(
    file: UploadFile = File(...),
    timezone_name: str = Form("UTC"),
) -> TranscriptPreview:
    parsed = await parse_uploaded_export(file, timezone_name)
    logger.info("transcript_previewed", extra=parsed.summary())
    return TranscriptPreview(
        participants=parsed.participants,
        message_count=parsed.message_count,
        total_messages=len(parsed.messages),
    )

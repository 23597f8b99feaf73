from fastapi import APIRouter, Depends, File, Form, HTTPException, UploadFile, status
from sqlalchemy.orm import Session

from app.core.config import get_settings
from app.db.session import get_db
from app.models.memory_profile import MemoryProfile
from app.routers.deps import parse_uploaded_export
from app.schemas.profile import MemoryProfileRead, MemoryProfileUpdate, PersonaPromptRead, TrainingMessageRead
from app.services.profiles import (
    ProfileNotFoundError,
    create_profile_from_chat,
    delete_memory_profile,
    get_memory_profile,
    get_training_messages,
    list_memory_profiles,
    update_memory_profile,
)
from app.services.prompting import build_persona_prompt

router = APIRouter(prefix="/profiles", tags=["profiles"])


def _get_profile_or_404(db: Session, profile_id: str) -> MemoryProfile:
    profile = get_memory_profile(db, profile_id)
    if not profile:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Memory profile not found")
    return profile


@router.post("", response_model=MemoryProfileRead, status_code=status.HTTP_201_CREATED)
async def create_profile(
    file: UploadFile = File(...),
    person: str = Form(...),
    name: str = Form(...),
    description: str | None = Form(default=None),
    relationship: str | None = Form(default=None),
    timezone_name: str = Form("UTC"),
    db: Session = Depends(get_db),
) -> MemoryProfile:
    parsed = await parse_uploaded_export(file, timezone_name)
    try:
        return create_profile_from_chat(
            db,
            parsed,
            person_name=person,
            name=name,
            description=description,
            relationship=relationship,
        )
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc


@router.get("", response_model=list[MemoryProfileRead])
def list_profiles(db: Session = Depends(get_db)) -> list[MemoryProfile]:
    return list_memory_profiles(db)


@router.get("/{profile_id}", response_model=MemoryProfileRead)
def get_profile(profile_id: str, db: Session = Depends(get_db)) -> MemoryProfile:
    return _get_profile_or_404(db, profile_id)


@router.patch("/{profile_id}", response_model=MemoryProfileRead)
def update_profile(profile_id: str, payload: MemoryProfileUpdate, db: Session = Depends(get_db)) -> MemoryProfile:
    try:
        return update_memory_profile(db, profile_id, **payload.model_dump(exclude_unset=True))
    except ProfileNotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Memory profile not found") from exc
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc


@router.delete("/{profile_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_profile(profile_id: str, db: Session = Depends(get_db)) -> None:
    try:
        delete_memory_profile(db, profile_id)
    except ProfileNotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Memory profile not found") from exc
    return None


@router.get("/{profile_id}/messages", response_model=list[TrainingMessageRead])
def list_profile_messages(profile_id: str, db: Session = Depends(get_db)) -> list:
    _get_profile_or_404(db, profile_id)
    return get_training_messages(db, profile_id)


@router.get("/{profile_id}/prompt", response_model=PersonaPromptRead)
def get_profile_prompt(profile_id: str, db: Session = Depends(get_db)) -> PersonaPromptRead:
    profile = _get_profile_or_404(db, profile_id)
    messages = get_training_messages(db, profile_id)
    prompt = build_persona_prompt(profile, messages, sample_size=get_settings().prompt_sample_messages)
    return PersonaPromptRead(profile_id=profile.id, prompt=prompt)

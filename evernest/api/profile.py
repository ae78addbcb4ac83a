"""Profile and settings endpoints for the current user."""

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from evernest.api.dependencies import get_current_user
from evernest.database import get_db
from evernest.models.profile import UserProfile
from evernest.models.user import User as UserModel
from evernest.schemas.profile import FamilyHistory, Profile, ProfileUpdate, ProfileUpsert

router = APIRouter(prefix="/api/v1/profile", tags=["profile"])


def _enum_values(data: dict) -> dict:
    return {key: getattr(value, "value", value) for key, value in data.items()}


@router.get("/", response_model=Profile)
def get_profile(user: UserModel = Depends(get_current_user)) -> UserProfile:
    """Get the current user's profile."""
    if not user.profile:
        raise HTTPException(status_code=404, detail="Profile not found")
    return user.profile


@router.put("/", response_model=Profile)
def upsert_profile(
    profile: ProfileUpsert,
    user: UserModel = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> UserProfile:
    """Create the profile or replace all of its settings."""
    data = _enum_values(profile.model_dump())
    db_profile = user.profile
    if db_profile is None:
        db_profile = UserProfile(user_id=user.id, **data)
        db.add(db_profile)
    else:
        for field, value in data.items():
            setattr(db_profile, field, value)

    db.commit()
    db.refresh(db_profile)
    return db_profile


@router.patch("/", response_model=Profile)
def update_profile(
    profile_update: ProfileUpdate,
    user: UserModel = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> UserProfile:
    """Update some profile settings."""
    db_profile = user.profile
    if db_profile is None:
        raise HTTPException(status_code=404, detail="Profile not found")

    update_data = _enum_values(profile_update.model_dump(exclude_unset=True))
    if update_data.get("parent_one_name", "") is None:
        raise HTTPException(status_code=422, detail="parent_one_name cannot be cleared")
    for field, value in update_data.items():
        setattr(db_profile, field, value)

    db.commit()
    db.refresh(db_profile)
    return db_profile


@router.get("/family-history", response_model=FamilyHistory)
def get_family_history(user: UserModel = Depends(get_current_user)) -> FamilyHistory:
    """Get the family health history entries."""
    entries = user.profile.family_history if user.profile else None
    return FamilyHistory(entries=entries or [])


@router.put("/family-history", response_model=FamilyHistory)
def replace_family_history(
    history: FamilyHistory,
    user: UserModel = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> FamilyHistory:
    """Replace the family health history, creating a default profile if needed."""
    db_profile = user.profile
    if db_profile is None:
        db_profile = UserProfile(user_id=user.id, parent_one_name=user.name or "Parent")
        db.add(db_profile)

    db_profile.family_history = [entry.model_dump(mode="json") for entry in history.entries]
    db.commit()
    db.refresh(db_profile)
    return FamilyHistory(entries=db_profile.family_history)

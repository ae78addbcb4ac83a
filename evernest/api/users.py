"""User account endpoints.

Accounts are registered by the upstream auth layer. Every other route acts
only on the caller's own account, identified by the X-User-Id header.
"""

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from evernest.api.dependencies import get_current_user
from evernest.database import get_db
from evernest.models.user import User as UserModel
from evernest.schemas.user import User, UserCreate, UserUpdate

router = APIRouter(prefix="/api/v1/users", tags=["users"])


def _require_self(user_id: int, current: UserModel) -> UserModel:
    if current.id != user_id:
        raise HTTPException(status_code=403, detail="Forbidden")
    return current


def _email_taken(db: Session, email: str, exclude_id: int | None = None) -> bool:
    query = db.query(UserModel).filter(UserModel.email == email)
    if exclude_id is not None:
        query = query.filter(UserModel.id != exclude_id)
    return query.first() is not None


@router.post("/", response_model=User, status_code=201)
def register_user(user: UserCreate, db: Session = Depends(get_db)) -> UserModel:
    """Register an account; the name defaults to the email's local part."""
    if _email_taken(db, user.email):
        raise HTTPException(status_code=409, detail="Email already registered")

    db_user = UserModel(email=user.email, name=user.name or user.email.split("@")[0])
    db.add(db_user)
    db.commit()
    db.refresh(db_user)
    return db_user


@router.get("/me", response_model=User)
def get_me(current: UserModel = Depends(get_current_user)) -> UserModel:
    """Get the caller's account."""
    return current


@router.get("/{user_id}", response_model=User)
def get_user(user_id: int, current: UserModel = Depends(get_current_user)) -> UserModel:
    """Get the caller's account by ID."""
    return _require_self(user_id, current)


@router.patch("/{user_id}", response_model=User)
def update_user(
    user_id: int,
    user_update: UserUpdate,
    current: UserModel = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> UserModel:
    """Change the caller's email or name."""
    user = _require_self(user_id, current)

    update_data = user_update.model_dump(exclude_unset=True)
    if update_data.get("email") is None:
        update_data.pop("email", None)
    elif _email_taken(db, update_data["email"], exclude_id=user.id):
        raise HTTPException(status_code=409, detail="Email already registered")

    for field, value in update_data.items():
        setattr(user, field, value)

    db.commit()
    db.refresh(user)
    return user


@router.delete("/{user_id}", status_code=204)
def delete_user(
    user_id: int,
    current: UserModel = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> None:
    """Delete the caller's account along with their profile and stories."""
    user = _require_self(user_id, current)
    db.delete(user)
    db.commit()

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.core.config import get_db
from app.core.security import get_current_user
from app.models.user import User
from app.services.users import user_service
from app.schemas.user import UserOut, UserPreferencesUpdate

router = APIRouter(prefix="/users", tags=["Users"])


@router.get("/me", response_model=UserOut, summary="Get my profile")
def get_me(current_user: User = Depends(get_current_user)):
    return current_user


@router.put("/me/preferences", response_model=UserOut, summary="Update my preferences")
def update_preferences(
    update_data: UserPreferencesUpdate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """
    Update typical wake and sleep times (`HH:MM` or `HH:MM:SS`).
    """
    return user_service.update_preferences(db, user=current_user, update_data=update_data)

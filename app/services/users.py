# services/users.py
import logging
from typing import Optional
from uuid import UUID
from sqlalchemy.orm import Session

from app.core.exceptions import DatabaseConflictError
from app.crud.user import crud_user
from app.models.user import User
from app.schemas.user import UserPreferencesUpdate

logger = logging.getLogger(__name__)


class UserService:
    """Profile rows for identity-provider users."""

    def __init__(self):
        self.user_crud = crud_user

    def get_or_create(self, db: Session, *, user_id: UUID, email: Optional[str] = None) -> User:
        user = self.user_crud.get(db, id=user_id)
        if user is None:
            try:
                user = self.user_crud.create(db, user_id=user_id, email=email)
                logger.info(f"Created profile for user {user_id}")
            except DatabaseConflictError:
                user = self.user_crud.get(db, id=user_id)
        elif email and user.email != email:
            user = self.user_crud.update_email(db, db_obj=user, email=email)
        return user

    def update_preferences(self, db: Session, *, user: User, update_data: UserPreferencesUpdate) -> User:
        return self.user_crud.update_preferences(db, db_obj=user, obj_in=update_data)


user_service = UserService()

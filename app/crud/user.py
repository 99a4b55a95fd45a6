# crud/user.py
from typing import Optional
from uuid import UUID
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.core.exceptions import DatabaseConflictError
from app.models.user import User
from app.schemas.user import UserPreferencesUpdate


class CRUDUser:
    # =====================================================================
    # CREATE
    # =====================================================================

    def create(self, db: Session, *, user_id: UUID, email: Optional[str] = None) -> User:
        """Create the profile row for an identity-provider user."""
        db_obj = User(id=user_id, email=email)
        db.add(db_obj)
        try:
            db.commit()
        except IntegrityError as exc:
            db.rollback()
            raise DatabaseConflictError(f"User {user_id} already exists") from exc
        db.refresh(db_obj)
        return db_obj

    # =====================================================================
    # READ
    # =====================================================================

    def get(self, db: Session, id: UUID) -> Optional[User]:
        return db.query(User).filter(User.id == id).first()

    # =====================================================================
    # UPDATE
    # =====================================================================

    def update_preferences(self, db: Session, *, db_obj: User, obj_in: UserPreferencesUpdate) -> User:
        for field, value in obj_in.model_dump(exclude_unset=True, exclude_none=True).items():
            setattr(db_obj, field, value)

        db.commit()
        db.refresh(db_obj)
        return db_obj

    def update_email(self, db: Session, *, db_obj: User, email: str) -> User:
        db_obj.email = email
        db.commit()
        db.refresh(db_obj)
        return db_obj


crud_user = CRUDUser()

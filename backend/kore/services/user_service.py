"""
User Service - account management with role safety rules.

Superadmin accounts can only be created by the seed script: the API never
creates a superadmin, never assigns the role, and never changes or deletes
an existing superadmin. Users may not change their own role or delete
themselves.
"""
import logging
import math
from typing import Any, Dict, Optional

from sqlalchemy import or_
from sqlalchemy.orm import Session

from kore.config import settings
from kore.errors import AuthError, ForbiddenError, NotFoundError, ValidationError
from kore.models.user import User
from kore.schemas.user import PasswordChange, UserCreate, UserUpdateMe
from kore.services.security import get_password_hash, verify_password
from kore.utils.payload import like_pattern

logger = logging.getLogger(__name__)

SUPERADMIN = "superadmin"
ALLOWED_ROLES = ["admin", "staff", "distributor"]
MIN_PASSWORD_LENGTH = 6


def normalize_email(email: Optional[str]) -> str:
    return str(email or "").strip().lower()


def _to_int(value: Any, default: int) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        return default


class UserService:

    def create_user(self, db: Session, data: UserCreate) -> User:
        name = str(data.name or "").strip()
        if len(name) < 2:
            raise ValidationError("Name is required (min 2 characters)")

        email = normalize_email(data.email)
        if not email or "@" not in email:
            raise ValidationError("Valid email is required")

        if not data.password or len(data.password) < MIN_PASSWORD_LENGTH:
            raise ValidationError(f"Password must be at least {MIN_PASSWORD_LENGTH} characters")

        role = str(data.role).strip().lower() if data.role else "staff"
        if role not in ALLOWED_ROLES:
            raise ValidationError(f"Invalid role. Allowed: {', '.join(ALLOWED_ROLES)}")

        if db.query(User).filter(User.email == email).first():
            raise ValidationError("Email already exists")

        user = User(
            name=name,
            email=email,
            hashed_password=get_password_hash(data.password),
            role=role,
            company_name=data.company_name,
            location=data.location,
        )
        db.add(user)
        db.commit()
        db.refresh(user)
        logger.info(f"Created user {user.id} with role {user.role}")
        return user

    def list_users(
        self,
        db: Session,
        page: Any = 1,
        limit: Any = None,
        search: Optional[str] = "",
        role: Optional[str] = "",
    ) -> Dict[str, Any]:
        """Paginated user listing; page is at least 1 and limit is clamped to 1..max"""
        page = max(_to_int(page, 1), 1)
        limit = _to_int(limit, settings.users_default_page_size) or settings.users_default_page_size
        limit = min(max(limit, 1), settings.users_max_page_size)

        query = db.query(User)
        search = str(search or "").strip()
        if search:
            pattern = like_pattern(search)
            query = query.filter(or_(
                User.name.ilike(pattern, escape="\\"),
                User.email.ilike(pattern, escape="\\"),
            ))
        role = str(role or "").strip().lower()
        if role:
            query = query.filter(User.role == role)

        total = query.count()
        items = (
            query.order_by(User.created_at.desc(), User.id.desc())
            .offset((page - 1) * limit)
            .limit(limit)
            .all()
        )
        return {
            "items": items,
            "meta": {
                "page": page,
                "limit": limit,
                "total": total,
                "total_pages": math.ceil(total / limit),
            },
        }

    def get_user(self, db: Session, user_id: int) -> User:
        user = db.query(User).filter(User.id == user_id).first()
        if not user:
            raise NotFoundError("User not found")
        return user

    def update_me(self, db: Session, user: User, data: UserUpdateMe) -> User:
        if "name" in data.model_fields_set:
            name = str(data.name or "").strip()
            if len(name) < 2:
                raise ValidationError("Name is required (min 2 characters)")
            user.name = name
        if "company_name" in data.model_fields_set:
            user.company_name = data.company_name
        if "location" in data.model_fields_set:
            user.location = data.location
        db.commit()
        db.refresh(user)
        return user

    def change_password(self, db: Session, user: User, data: PasswordChange) -> None:
        if not data.current_password or not data.new_password:
            raise ValidationError("Current and new password are required")
        if not verify_password(data.current_password, user.hashed_password):
            raise AuthError("Current password is incorrect")
        if len(data.new_password) < MIN_PASSWORD_LENGTH:
            raise ValidationError(f"Password must be at least {MIN_PASSWORD_LENGTH} characters")
        user.hashed_password = get_password_hash(data.new_password)
        db.commit()
        logger.info(f"User {user.id} changed their password")

    def update_user_role(self, db: Session, actor: User, user_id: int, role: Optional[str]) -> User:
        clean_role = str(role or "").strip().lower()
        if clean_role not in ALLOWED_ROLES:
            raise ValidationError(f"Invalid role. Allowed: {', '.join(ALLOWED_ROLES)}")

        user = self.get_user(db, user_id)
        if user.id == actor.id:
            raise ForbiddenError("You cannot change your own role")
        if user.role == SUPERADMIN:
            raise ForbiddenError("Superadmin role cannot be changed")

        user.role = clean_role
        db.commit()
        db.refresh(user)
        logger.info(f"User {user.id} role set to {clean_role} by {actor.id}")
        return user

    def delete_user(self, db: Session, actor: User, user_id: int) -> None:
        user = self.get_user(db, user_id)
        if user.id == actor.id:
            raise ForbiddenError("You cannot delete your own account")
        if user.role == SUPERADMIN:
            raise ForbiddenError("Superadmin cannot be deleted")
        db.delete(user)
        db.commit()
        logger.info(f"User {user_id} deleted by {actor.id}")


user_service = UserService()

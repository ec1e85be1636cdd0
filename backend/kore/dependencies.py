from typing import Optional

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from kore.database import get_db
from kore.errors import AuthError, ForbiddenError
from kore.models.user import User
from kore.services.security import decode_access_token

bearer_scheme = HTTPBearer(auto_error=False)


def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    db: Session = Depends(get_db),
) -> User:
    """Resolve the bearer token to a user, or fail with 401"""
    if not credentials or not credentials.credentials:
        raise AuthError("Not authorized, no token")

    payload = decode_access_token(credentials.credentials)
    try:
        user_id = int(payload["sub"])
    except (TypeError, ValueError):
        raise AuthError("Not authorized, token invalid")

    user = db.query(User).filter(User.id == user_id).first()
    if not user:
        raise AuthError("Not authorized, user not found")
    return user


def require_roles(*allowed_roles: str):
    """Dependency factory restricting a route to the given roles"""

    def checker(user: User = Depends(get_current_user)) -> User:
        if not user.role:
            raise ForbiddenError("Forbidden")
        if user.role not in allowed_roles:
            raise ForbiddenError("Access denied")
        return user

    return checker

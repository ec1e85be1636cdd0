import logging
from typing import Any, Dict, Optional

from sqlalchemy.orm import Session

from kore.errors import AuthError, ValidationError
from kore.models.user import User
from kore.services.security import create_access_token, verify_password
from kore.services.user_service import normalize_email

logger = logging.getLogger(__name__)

# Same message for unknown email and wrong password, so accounts can't be enumerated
INVALID_CREDENTIALS = "Invalid email or password"


class AuthService:

    def login(self, db: Session, email: Optional[str], password: Optional[str]) -> Dict[str, Any]:
        """
        Authenticate a user and issue an access token.

        Returns:
            {"token": <jwt>, "user": <User>}
        """
        email = normalize_email(email)
        password = str(password or "")
        if not email or not password:
            raise ValidationError("Email and password are required")

        user = db.query(User).filter(User.email == email).first()
        if not user or not verify_password(password, user.hashed_password):
            logger.info(f"Failed login attempt for {email}")
            raise AuthError(INVALID_CREDENTIALS)

        token = create_access_token(user.id, user.role)
        logger.info(f"User {user.id} logged in")
        return {"token": token, "user": user}


auth_service = AuthService()

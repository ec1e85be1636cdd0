from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from kore.database import get_db
from kore.dependencies import get_current_user
from kore.models.user import User
from kore.schemas.user import ApiResponse, LoginRequest, UserResponse
from kore.services.auth_service import auth_service

router = APIRouter(prefix="/api/auth", tags=["auth"])


@router.post("/login", response_model=ApiResponse)
def login(credentials: LoginRequest, db: Session = Depends(get_db)):
    result = auth_service.login(db, credentials.email, credentials.password)
    return ApiResponse(
        message="Login successful",
        data={"token": result["token"], "user": UserResponse.model_validate(result["user"])},
    )


@router.get("/me", response_model=ApiResponse)
def me(user: User = Depends(get_current_user)):
    return ApiResponse(message="Profile fetched", data=UserResponse.model_validate(user))


@router.post("/logout", response_model=ApiResponse)
def logout(user: User = Depends(get_current_user)):
    """Tokens are stateless; the client discards its copy"""
    return ApiResponse(message="Logged out successfully")

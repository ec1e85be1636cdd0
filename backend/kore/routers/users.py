from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from typing import Optional
from kore.database import get_db
from kore.dependencies import get_current_user, require_roles
from kore.models.user import User
from kore.schemas.user import ApiResponse, PasswordChange, RoleUpdate, UserCreate, UserResponse, UserUpdateMe
from kore.services.user_service import user_service

router = APIRouter(prefix="/api/users", tags=["users"])


@router.get("/me", response_model=ApiResponse)
def get_me(user: User = Depends(get_current_user)):
    return ApiResponse(message="Profile fetched", data=UserResponse.model_validate(user))


@router.patch("/me", response_model=ApiResponse)
def update_me(data: UserUpdateMe, user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    user = user_service.update_me(db, user, data)
    return ApiResponse(message="Profile updated successfully", data=UserResponse.model_validate(user))


@router.patch("/me/password", response_model=ApiResponse)
def change_password(data: PasswordChange, user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    user_service.change_password(db, user, data)
    return ApiResponse(message="Password updated successfully")


@router.post("", response_model=ApiResponse, status_code=201)
def create_user(
    data: UserCreate,
    actor: User = Depends(require_roles("superadmin")),
    db: Session = Depends(get_db)
):
    user = user_service.create_user(db, data)
    return ApiResponse(message="User created successfully", data=UserResponse.model_validate(user))


@router.get("", response_model=ApiResponse)
def list_users(
    page: Optional[str] = Query(None),
    limit: Optional[str] = Query(None),
    search: Optional[str] = Query(""),
    role: Optional[str] = Query(""),
    actor: User = Depends(require_roles("superadmin", "admin")),
    db: Session = Depends(get_db)
):
    """Paginated user listing; out-of-range page/limit values are clamped"""
    result = user_service.list_users(db, page=page, limit=limit, search=search, role=role)
    return ApiResponse(
        message="Users fetched successfully",
        data=[UserResponse.model_validate(u) for u in result["items"]],
        meta=result["meta"],
    )


@router.patch("/{user_id}/role", response_model=ApiResponse)
def update_user_role(
    user_id: int,
    data: RoleUpdate,
    actor: User = Depends(require_roles("superadmin")),
    db: Session = Depends(get_db)
):
    user = user_service.update_user_role(db, actor, user_id, data.role)
    return ApiResponse(message="User role updated", data=UserResponse.model_validate(user))


@router.delete("/{user_id}", response_model=ApiResponse)
def delete_user(
    user_id: int,
    actor: User = Depends(require_roles("superadmin")),
    db: Session = Depends(get_db)
):
    user_service.delete_user(db, actor, user_id)
    return ApiResponse(message="User deleted successfully")

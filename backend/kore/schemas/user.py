from pydantic import BaseModel
from typing import Any, Optional
from datetime import datetime


class UserCreate(BaseModel):
    name: Optional[str] = None
    email: Optional[str] = None
    password: Optional[str] = None
    role: Optional[str] = None
    company_name: Optional[str] = None
    location: Optional[str] = None


class UserUpdateMe(BaseModel):
    name: Optional[str] = None
    company_name: Optional[str] = None
    location: Optional[str] = None


class PasswordChange(BaseModel):
    current_password: Optional[str] = None
    new_password: Optional[str] = None


class RoleUpdate(BaseModel):
    role: Optional[str] = None


class LoginRequest(BaseModel):
    email: Optional[str] = None
    password: Optional[str] = None


class UserResponse(BaseModel):
    id: int
    name: str
    email: str
    role: str
    company_name: Optional[str] = None
    location: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class ApiResponse(BaseModel):
    """Envelope used by the auth and users endpoints"""
    success: bool = True
    message: str = "OK"
    data: Any = None
    meta: Optional[dict] = None

# File: app/schemas/user.py
from pydantic import BaseModel
from typing import Optional
from datetime import datetime
from app.models.user import UserRole

# ==========================================
# REQUEST SCHEMAS
# ==========================================

# Email and name rules live on the model; these only shape the payload.

class UserCreate(BaseModel):
    """Schema for self-registration"""
    name: str
    email: str
    password: str
    image: Optional[str] = None

class UserProfileUpdate(BaseModel):
    """Schema for updating own profile"""
    name: str
    email: str

class UserRoleChange(BaseModel):
    """Schema for changing a user's role"""
    role: UserRole

# ==========================================
# RESPONSE SCHEMAS
# ==========================================

class User(BaseModel):
    """Standard user response schema (never includes the password hash)"""
    id: int
    name: str
    email: str
    image: Optional[str] = None
    role: UserRole
    created_at: datetime
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True

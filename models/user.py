from typing import Optional

from pydantic import BaseModel, EmailStr, Field


class User(BaseModel):
    """Identity resolved from a verified Firebase ID token"""
    user_id: str
    email: Optional[str] = None


class UserProfile(BaseModel):
    id: str
    name: str
    email: str
    avatar: Optional[str] = None
    date: str


class RegisterRequest(BaseModel):
    name: str = Field(..., min_length=1)
    email: EmailStr
    password: str = Field(..., min_length=6)
    password2: Optional[str] = None

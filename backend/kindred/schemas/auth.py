from pydantic import BaseModel, ConfigDict, Field
from typing import Optional
from datetime import datetime

from kindred.models.user import UserRole


class UserLogin(BaseModel):
    """Login by user name or email address"""
    identifier: str = Field(..., min_length=1)
    password: str


class Token(BaseModel):
    access_token: str
    token_type: str = "bearer"
    expires_in: int


class UserResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    user_name: str
    real_name: str
    email: str
    role: UserRole
    verified: bool
    approved: bool
    last_login: Optional[datetime] = None

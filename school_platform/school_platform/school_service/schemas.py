from datetime import datetime
from pydantic import BaseModel

from typing import List, Optional


# Fields are optional so a missing value reaches the service and answers 400
class RegisterRequest(BaseModel):
    name: Optional[str] = None
    email: Optional[str] = None
    password: Optional[str] = None


class LoginRequest(BaseModel):
    email: Optional[str] = None
    password: Optional[str] = None


class MessageResponse(BaseModel):
    message: str


class ErrorResponse(BaseModel):
    error: str


class UserIdentity(BaseModel):
    email: str
    name: str


class LoginResponse(BaseModel):
    success: bool = True
    message: str = "Login successful"
    token: str
    user: UserIdentity


class UserListItem(BaseModel):
    id: int
    name: str
    email: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class PageMeta(BaseModel):
    totalItems: int
    page: int
    totalPages: int


class UserListResponse(BaseModel):
    meta: PageMeta
    data: List[UserListItem]

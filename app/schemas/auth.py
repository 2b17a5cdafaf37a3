"""Pydantic schemas for authentication and user records."""

from datetime import datetime
from pydantic import BaseModel, EmailStr, Field, field_validator

from app.models.user import UserRole
from app.schemas.common import reject_null


class UserRegister(BaseModel):
    """Request schema for user registration."""
    username: str = Field(..., min_length=3, max_length=255)
    email: EmailStr
    password: str = Field(..., min_length=6)
    first_name: str | None = None
    last_name: str | None = None


class UserLogin(BaseModel):
    """Request schema for login: username or email plus password."""
    username: str
    password: str


class UserCreate(BaseModel):
    """Storage-level insert; `password` is already hashed."""
    username: str
    email: str
    password: str
    first_name: str | None = None
    last_name: str | None = None
    profile_image_url: str | None = None
    role: UserRole = UserRole.LEAD
    stripe_customer_id: str | None = None
    stripe_subscription_id: str | None = None

    class Config:
        use_enum_values = True


class UserUpdate(BaseModel):
    """Profile or payment-provider linkage changes."""
    email: EmailStr | None = None
    first_name: str | None = None
    last_name: str | None = None
    profile_image_url: str | None = None
    role: UserRole | None = None
    stripe_customer_id: str | None = None
    stripe_subscription_id: str | None = None

    not_null = field_validator("email", "role", mode="before")(reject_null)

    class Config:
        use_enum_values = True


class Token(BaseModel):
    """Response schema for login, returns JWT token."""
    access_token: str
    token_type: str = "bearer"
    user_id: str | None = None
    role: str | None = None


class UserOut(BaseModel):
    """Response schema for user info. Never carries the password hash."""
    id: str
    username: str
    email: str
    first_name: str | None = None
    last_name: str | None = None
    profile_image_url: str | None = None
    role: str
    stripe_customer_id: str | None = None
    stripe_subscription_id: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    class Config:
        from_attributes = True


class MessageResponse(BaseModel):
    """Generic success message response."""
    message: str

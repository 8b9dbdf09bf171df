"""User/identity request and response schemas - API contract and validation."""

from datetime import datetime

from pydantic import BaseModel, EmailStr, Field


class RegisterRequest(BaseModel):
    email: EmailStr
    # bcrypt accepts max 72 bytes; longer passwords cause 500. Validate here for clear 422.
    password: str = Field(..., min_length=1, max_length=72)


class LoginRequest(BaseModel):
    email: EmailStr
    password: str


class TokenResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    user_id: str


class UserResponse(BaseModel):
    id: str
    email: str | None = None
    username: str
    created_at: datetime

    model_config = {"from_attributes": True}


class Identity(BaseModel):
    """The caller as seen by the repositories. `id` is None for anonymous callers."""

    id: str | None = None
    email: str | None = None
    username: str | None = None

    model_config = {"from_attributes": True, "frozen": True}

    @property
    def is_anonymous(self) -> bool:
        return self.id is None


ANONYMOUS = Identity()


class MeResponse(Identity):
    anonymous: bool

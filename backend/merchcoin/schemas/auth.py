"""Auth Schemas — register-or-login request and token response."""

from pydantic import BaseModel, Field, field_validator


class AuthRequest(BaseModel):
    """Credentials — username is stripped; both fields required and non-empty."""
    username: str = Field(min_length=1, max_length=64)
    password: str = Field(min_length=1, max_length=128)

    @field_validator("username")
    @classmethod
    def strip_username(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("username cannot be empty or whitespace")
        return v


class AuthResponse(BaseModel):
    token: str

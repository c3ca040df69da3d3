"""Pydantic DTOs for sign-in and the current session."""

from pydantic import BaseModel, Field


class LoginRequest(BaseModel):
    email: str = Field(..., min_length=3, examples=["admin@moldops.local"])
    password: str = Field(..., min_length=1)


class UserSchema(BaseModel):
    id: str
    email: str | None = None


class ThemeSchema(BaseModel):
    key: str
    light_mode: bool
    palette: dict[str, str]


class SessionResponse(BaseModel):
    """Schema returned to the client for the current session."""

    authenticated: bool
    user: UserSchema | None = None
    roles: list[str] = []
    theme: ThemeSchema | None = None


class LoginResponse(SessionResponse):
    access_token: str
    refresh_token: str | None = None
    expires_in: int | None = None
    token_type: str = "bearer"

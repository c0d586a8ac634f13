"""Request/response schemas for register, login and token identity."""

from pydantic import BaseModel, Field

from practice_api.schemas.users import CamelModel, UserPublic


class RegisterRequest(BaseModel):
    """Registration body. Fields are optional here; the validation layer reports what is missing."""

    username: str | None = Field(default=None, description="Username (3-255 chars)")
    email: str | None = Field(default=None, description="Email address")
    password: str | None = Field(default=None, description="Password (6-128 chars)")


class LoginRequest(BaseModel):
    """Credentials for login."""

    email: str | None = Field(default=None, description="Email address")
    password: str | None = Field(default=None, description="Password")


class RegistrationInput(BaseModel):
    """Registration fields after validation and normalization."""

    username: str
    email: str
    password: str


class LoginInput(BaseModel):
    email: str
    password: str


class TokenIdentity(BaseModel):
    """Identity claims embedded in an access token."""

    user_id: str
    email: str
    role: str


class CurrentUser(BaseModel):
    """Authenticated user (id, username, email, role) for dependency injection."""

    id: str
    username: str
    email: str
    role: str

    model_config = {"from_attributes": True}


class RegisterResponse(CamelModel):
    message: str = "User created successfully"
    user: UserPublic


class LoginResponse(CamelModel):
    """JWT access token and the authenticated user returned after login."""

    message: str = "Login successful"
    token: str = Field(..., description="JWT access token")
    token_type: str = Field(default="bearer", description="Token type")
    user: UserPublic

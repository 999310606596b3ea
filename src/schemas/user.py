"""User schema definitions."""

from typing import Optional

from pydantic import BaseModel, Field, field_validator

from config import MIN_PASSWORD_LENGTH


class User(BaseModel):
    id: int
    email: str
    name: str
    role: str = Field(default="student", description="'admin' or 'student'")
    country: Optional[str] = None
    phone_number: Optional[str] = None
    guardian_phone: Optional[str] = None
    current_location: Optional[str] = None
    created_at: Optional[str] = None


class RegisterRequest(BaseModel):
    email: str
    password: str = Field(min_length=MIN_PASSWORD_LENGTH)
    name: str
    country: str
    phone_number: str
    guardian_phone: str
    current_location: str

    @field_validator(
        "email", "name", "country", "phone_number", "guardian_phone", "current_location"
    )
    @classmethod
    def _strip_required(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("must not be empty")
        return value


class LoginRequest(BaseModel):
    email: str
    password: str


class AuthResponse(BaseModel):
    token: str
    user: User


class ValidateTokenResponse(BaseModel):
    valid: bool = True
    user: User


class StudentPatch(BaseModel):
    """Fields an administrator may change on a student; unset fields stay as they are."""

    email: Optional[str] = None
    name: Optional[str] = None
    password: Optional[str] = Field(default=None, min_length=MIN_PASSWORD_LENGTH)
    country: Optional[str] = None
    phone_number: Optional[str] = None
    guardian_phone: Optional[str] = None
    current_location: Optional[str] = None

    @field_validator("email", "name")
    @classmethod
    def _strip_identity(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return value
        value = value.strip()
        if not value:
            raise ValueError("must not be empty")
        return value

    def changes(self) -> dict:
        """Return only the fields the caller actually sent."""
        return self.model_dump(exclude_unset=True)

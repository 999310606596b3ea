"""Teacher schema definitions."""

from typing import Optional

from pydantic import BaseModel


class Teacher(BaseModel):
    id: int
    name: str
    bio: Optional[str] = None
    subject: str
    photo: Optional[str] = None
    created_at: str


class CreateTeacherRequest(BaseModel):
    name: str = ""
    subject: str = ""
    bio: Optional[str] = None
    photo: Optional[str] = None

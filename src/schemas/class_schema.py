"""Class schema definitions.

``ClassPatch`` enumerates every field an administrator may change on an
existing class; fields left unset are not touched.
"""

from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, Field


class ClassInfo(BaseModel):
    id: int
    title: str
    description: Optional[str] = None
    teacher_id: Optional[int] = None
    teacher_name: Optional[str] = None
    video_url: Optional[str] = None
    thumbnail: Optional[str] = None
    price: Decimal
    is_free: bool
    created_at: str


class CreateClassRequest(BaseModel):
    title: str = Field(min_length=1)
    description: Optional[str] = None
    teacher_id: int
    video_url: Optional[str] = None
    thumbnail: Optional[str] = None
    price: Decimal = Field(default=Decimal("0"), ge=0)


class ClassPatch(BaseModel):
    title: Optional[str] = Field(default=None, min_length=1)
    description: Optional[str] = None
    video_url: Optional[str] = None
    thumbnail: Optional[str] = None
    price: Optional[Decimal] = Field(default=None, ge=0)

    def changes(self) -> dict:
        """Return only the fields the caller actually sent."""
        return self.model_dump(exclude_unset=True)

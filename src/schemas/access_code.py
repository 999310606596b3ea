"""Access code schema definitions."""

from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, Field


class CreateAccessCodeRequest(BaseModel):
    class_id: int
    price: Decimal = Field(ge=0)


class AccessCodeInfo(BaseModel):
    id: int
    code: str
    class_id: int
    class_title: Optional[str] = None
    price: Decimal
    is_used: bool
    used_by: Optional[int] = None
    used_by_name: Optional[str] = None
    used_at: Optional[str] = None
    created_at: str

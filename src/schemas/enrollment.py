"""Enrollment schema definitions.

Request and response bodies of the redemption and free-enrollment endpoints,
plus the results returned by the services behind them.
"""

from typing import Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field


class RedeemCodeRequest(BaseModel):
    code: str = Field(description="The access code to redeem.", min_length=1)


class EnrollFreeRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    class_id: int = Field(
        description="The ID of the free class to enroll in.",
        validation_alias=AliasChoices("classId", "class_id"),
    )


class RedemptionResult(BaseModel):
    """Outcome of a successful access code redemption."""

    class_id: int


class EnrollResult(BaseModel):
    """Outcome of a successful free enrollment."""

    class_id: int


class EnrollmentResponse(BaseModel):
    success: bool = True
    message: str
    class_id: int = Field(serialization_alias="classId")


class EnrolledClassInfo(BaseModel):
    id: int
    title: str
    description: Optional[str] = None
    teacher_id: Optional[int] = None
    teacher_name: Optional[str] = None
    video_url: Optional[str] = None
    thumbnail: Optional[str] = None
    is_free: bool
    enrolled_at: str


class CheckAccessResponse(BaseModel):
    has_access: bool = Field(serialization_alias="hasAccess")

"""Conversions between ORM models and API schemas."""

from typing import Optional

from models.access_code import AccessCodeModel
from models.class_model import ClassModel
from models.teacher import TeacherModel
from models.user import UserModel
from schemas.access_code import AccessCodeInfo
from schemas.class_schema import ClassInfo
from schemas.enrollment import EnrolledClassInfo
from schemas.teacher import Teacher
from schemas.user import User


def model_to_user(model: UserModel) -> User:
    return User(
        id=model.id,
        email=model.email,
        name=model.name,
        role=model.role,
        country=model.country,
        phone_number=model.phone_number,
        guardian_phone=model.guardian_phone,
        current_location=model.current_location,
        created_at=model.created_at,
    )


def model_to_teacher(model: TeacherModel) -> Teacher:
    return Teacher(
        id=model.id,
        name=model.name,
        bio=model.bio,
        subject=model.subject,
        photo=model.photo,
        created_at=model.created_at,
    )


def model_to_class(model: ClassModel, teacher_name: Optional[str] = None) -> ClassInfo:
    return ClassInfo(
        id=model.id,
        title=model.title,
        description=model.description,
        teacher_id=model.teacher_id,
        teacher_name=teacher_name,
        video_url=model.video_url,
        thumbnail=model.thumbnail,
        price=model.price,
        is_free=model.is_free,
        created_at=model.created_at,
    )


def model_to_enrolled_class(
    model: ClassModel, teacher_name: Optional[str], enrolled_at: str
) -> EnrolledClassInfo:
    return EnrolledClassInfo(
        id=model.id,
        title=model.title,
        description=model.description,
        teacher_id=model.teacher_id,
        teacher_name=teacher_name,
        video_url=model.video_url,
        thumbnail=model.thumbnail,
        is_free=model.is_free,
        enrolled_at=enrolled_at,
    )


def model_to_access_code(
    model: AccessCodeModel,
    class_title: Optional[str] = None,
    used_by_name: Optional[str] = None,
) -> AccessCodeInfo:
    return AccessCodeInfo(
        id=model.id,
        code=model.code,
        class_id=model.class_id,
        class_title=class_title,
        price=model.price,
        is_used=model.is_used,
        used_by=model.used_by,
        used_by_name=used_by_name,
        used_at=model.used_at,
        created_at=model.created_at,
    )

from .base import Base
from .user import UserModel
from .teacher import TeacherModel
from .class_model import ClassModel
from .access_code import AccessCodeModel
from .enrollment import EnrollmentModel

__all__ = [
    "Base",
    "UserModel",
    "TeacherModel",
    "ClassModel",
    "AccessCodeModel",
    "EnrollmentModel",
]

"""Dependency injection module for FastAPI.

This module provides dependency injection functions for FastAPI routes,
following Google Python Style Guide and FastAPI best practices. Every manager,
store and service is built around the request-scoped session from ``get_db``.
"""

from typing import Annotated

from fastapi import Depends
from sqlalchemy.orm import Session

from core.database import get_db
from utils import access_code_store
from utils import class_manager
from utils import enrollment_service
from utils import redemption_service
from utils import teacher_manager
from utils import user_manager


def get_user_manager(db: Session = Depends(get_db)) -> user_manager.UserManager:
    """Get UserManager instance with request-scoped DB session.

    Args:
        db: Database session.

    Returns:
        UserManager instance.
    """
    return user_manager.UserManager(db)


def get_teacher_manager(db: Session = Depends(get_db)) -> teacher_manager.TeacherManager:
    """Get TeacherManager instance with request-scoped DB session."""
    return teacher_manager.TeacherManager(db)


def get_class_manager(db: Session = Depends(get_db)) -> class_manager.ClassManager:
    """Get ClassManager instance with request-scoped DB session."""
    return class_manager.ClassManager(db)


def get_access_code_store(
    db: Session = Depends(get_db),
) -> access_code_store.AccessCodeStore:
    """Get AccessCodeStore instance with request-scoped DB session."""
    return access_code_store.AccessCodeStore(db)


def get_redemption_service(
    db: Session = Depends(get_db),
) -> redemption_service.RedemptionService:
    """Get RedemptionService instance with request-scoped DB session.

    Args:
        db: Database session; the redemption transaction runs on it.

    Returns:
        RedemptionService instance.
    """
    return redemption_service.RedemptionService(db)


def get_free_enrollment_service(
    db: Session = Depends(get_db),
) -> enrollment_service.FreeEnrollmentService:
    """Get FreeEnrollmentService instance with request-scoped DB session."""
    return enrollment_service.FreeEnrollmentService(db)


# Type aliases for dependency injection
UserManagerDep = Annotated[
    user_manager.UserManager, Depends(get_user_manager)
]
TeacherManagerDep = Annotated[
    teacher_manager.TeacherManager, Depends(get_teacher_manager)
]
ClassManagerDep = Annotated[
    class_manager.ClassManager, Depends(get_class_manager)
]
AccessCodeStoreDep = Annotated[
    access_code_store.AccessCodeStore, Depends(get_access_code_store)
]
RedemptionServiceDep = Annotated[
    redemption_service.RedemptionService, Depends(get_redemption_service)
]
FreeEnrollmentServiceDep = Annotated[
    enrollment_service.FreeEnrollmentService,
    Depends(get_free_enrollment_service),
]

"""Enrollment into free classes."""

import logging
from typing import List, Optional

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from core.exceptions import (
    AlreadyEnrolledError,
    ClassAccessError,
    ClassNotFoundOrNotFreeError,
    StoreError,
)
from schemas.enrollment import EnrolledClassInfo, EnrollResult
from utils.class_manager import ClassManager
from utils.converters import model_to_enrolled_class
from utils.enrollment_store import EnrollmentStore

logger = logging.getLogger(__name__)


class FreeEnrollmentService:
    """Enrolls users in free classes and answers access queries."""

    def __init__(
        self,
        db: Session,
        classes: Optional[ClassManager] = None,
        enrollments: Optional[EnrollmentStore] = None,
    ):
        self.db = db
        self.classes = classes or ClassManager(db)
        self.enrollments = enrollments or EnrollmentStore(db)

    def enroll_free(self, user_id: int, class_id: int) -> EnrollResult:
        """Enroll a user in a class flagged free.

        The unique ``(user_id, class_id)`` constraint backs up the existence
        check: a duplicate insert from a concurrent request is reported as
        AlreadyEnrolledError, not as a store failure.

        Raises:
            ClassNotFoundOrNotFreeError: If the class is missing or paid.
            AlreadyEnrolledError: If the user already has the class.
            StoreError: If the database fails; nothing was changed.
        """
        try:
            if self.classes.get_free_class(class_id) is None:
                raise ClassNotFoundOrNotFreeError(class_id)

            if self.enrollments.exists(user_id, class_id):
                raise AlreadyEnrolledError(user_id, class_id)

            try:
                self.enrollments.add(user_id, class_id)
            except IntegrityError as exc:
                raise AlreadyEnrolledError(user_id, class_id) from exc

            self.db.commit()
        except ClassAccessError as exc:
            self.db.rollback()
            logger.info("Free enrollment of user %s in class %s refused: %s", user_id, class_id, exc)
            raise
        except SQLAlchemyError as exc:
            self.db.rollback()
            logger.exception("Free enrollment of user %s in class %s failed", user_id, class_id)
            raise StoreError("Database error during enrollment") from exc

        logger.info("User %s enrolled in free class %s", user_id, class_id)
        return EnrollResult(class_id=class_id)

    def has_access(self, user_id: int, class_id: int) -> bool:
        return self.enrollments.exists(user_id, class_id)

    def list_my_classes(self, user_id: int) -> List[EnrolledClassInfo]:
        rows = self.enrollments.list_classes_for_user(user_id)
        return [
            model_to_enrolled_class(class_model, teacher_name, enrolled_at)
            for class_model, teacher_name, enrolled_at in rows
        ]

"""Enrollment persistence.

Like ``AccessCodeStore``, nothing here commits. ``add`` flushes so that a
unique-constraint violation surfaces inside the caller's transaction.
"""

from datetime import datetime
from typing import List, Optional, Tuple

import pytz
from sqlalchemy.orm import Session

from models.class_model import ClassModel
from models.enrollment import EnrollmentModel
from models.teacher import TeacherModel


class EnrollmentStore:
    """Reads and writes ``user_classes`` rows through an injected session."""

    def __init__(self, db: Session):
        self.db = db

    def get(self, user_id: int, class_id: int) -> Optional[EnrollmentModel]:
        return (
            self.db.query(EnrollmentModel)
            .filter(
                EnrollmentModel.user_id == user_id,
                EnrollmentModel.class_id == class_id,
            )
            .first()
        )

    def exists(self, user_id: int, class_id: int) -> bool:
        return self.get(user_id, class_id) is not None

    def add(self, user_id: int, class_id: int) -> EnrollmentModel:
        """Insert an enrollment row.

        Raises:
            IntegrityError: If the user is already enrolled in the class.
        """
        model = EnrollmentModel(
            user_id=user_id,
            class_id=class_id,
            enrolled_at=datetime.now(pytz.utc).isoformat(),
        )
        self.db.add(model)
        self.db.flush()
        return model

    def list_classes_for_user(
        self, user_id: int
    ) -> List[Tuple[ClassModel, Optional[str], str]]:
        """List a user's classes with teacher name and enrollment time, newest first."""
        return (
            self.db.query(ClassModel, TeacherModel.name, EnrollmentModel.enrolled_at)
            .join(EnrollmentModel, EnrollmentModel.class_id == ClassModel.id)
            .outerjoin(TeacherModel, TeacherModel.id == ClassModel.teacher_id)
            .filter(EnrollmentModel.user_id == user_id)
            .order_by(EnrollmentModel.enrolled_at.desc(), EnrollmentModel.id.desc())
            .all()
        )

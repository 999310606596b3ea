"""Teacher management utilities."""

import logging
from datetime import datetime
from typing import List, Optional

import pytz
from sqlalchemy.orm import Session

from models.class_model import ClassModel
from models.teacher import TeacherModel

logger = logging.getLogger(__name__)


class TeacherNotFoundError(Exception):
    """Exception raised when a teacher is not found."""

    pass


class TeacherManager:
    """Manages teacher profiles."""

    def __init__(self, db: Session):
        self.db = db

    def list_teachers(self) -> List[TeacherModel]:
        return (
            self.db.query(TeacherModel)
            .order_by(TeacherModel.created_at.desc(), TeacherModel.id.desc())
            .all()
        )

    def get_teacher(self, teacher_id: int) -> TeacherModel:
        model = self.db.query(TeacherModel).filter(TeacherModel.id == teacher_id).first()
        if not model:
            raise TeacherNotFoundError(teacher_id)
        return model

    def create_teacher(
        self,
        name: str,
        subject: str,
        bio: Optional[str] = None,
        photo: Optional[str] = None,
    ) -> TeacherModel:
        """Create a teacher profile.

        Args:
            name: Teacher's display name.
            subject: Subject taught.
            bio: Optional biography.
            photo: Optional photo URL.

        Returns:
            The persisted TeacherModel.

        Raises:
            ValueError: If name or subject is blank.
        """
        if not name or not name.strip():
            raise ValueError("Teacher name is required")
        if not subject or not subject.strip():
            raise ValueError("Subject is required")

        model = TeacherModel(
            name=name.strip(),
            bio=(bio or "").strip(),
            subject=subject.strip(),
            photo=photo,
            created_at=datetime.now(pytz.utc).isoformat(),
        )
        self.db.add(model)
        self.db.commit()
        self.db.refresh(model)
        logger.info("Created teacher %s", model.id)
        return model

    def delete_teacher(self, teacher_id: int) -> None:
        """Delete a teacher; their classes are kept without a teacher.

        Raises:
            TeacherNotFoundError: If the teacher does not exist.
        """
        model = self.get_teacher(teacher_id)
        self.db.query(ClassModel).filter(ClassModel.teacher_id == teacher_id).update(
            {ClassModel.teacher_id: None}, synchronize_session=False
        )
        self.db.delete(model)
        self.db.commit()
        logger.info("Deleted teacher: %s", teacher_id)

    def count_teachers(self) -> int:
        return self.db.query(TeacherModel).count()

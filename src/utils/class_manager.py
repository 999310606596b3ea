"""Class management utilities."""

import logging
from datetime import datetime
from decimal import Decimal
from typing import List, Optional, Tuple

import pytz
from sqlalchemy.orm import Session

from models.class_model import ClassModel
from models.teacher import TeacherModel
from schemas.class_schema import ClassPatch, CreateClassRequest

logger = logging.getLogger(__name__)


class ClassNotFoundError(Exception):
    """Exception raised when a class is not found."""

    pass


class EmptyPatchError(ValueError):
    """Exception raised when a class update carries no fields."""

    pass


def is_free_price(price: Optional[Decimal]) -> bool:
    """A class is free exactly when its price is zero."""
    return price is None or Decimal(price) == 0


class ClassManager:
    """Manages class catalogue operations."""

    def __init__(self, db: Session):
        self.db = db

    def create_class(self, req: CreateClassRequest) -> ClassModel:
        """Create a new class; ``is_free`` follows from the price."""
        class_model = ClassModel(
            title=req.title.strip(),
            description=req.description,
            teacher_id=req.teacher_id,
            video_url=req.video_url,
            thumbnail=req.thumbnail,
            price=req.price,
            is_free=is_free_price(req.price),
            created_at=datetime.now(pytz.utc).isoformat(),
        )
        self.db.add(class_model)
        self.db.commit()
        self.db.refresh(class_model)
        logger.info("Created class %s (free=%s)", class_model.id, class_model.is_free)
        return class_model

    def get_class(self, class_id: int) -> ClassModel:
        model = self.db.query(ClassModel).filter(ClassModel.id == class_id).first()
        if not model:
            raise ClassNotFoundError(class_id)
        return model

    def get_free_class(self, class_id: int) -> Optional[ClassModel]:
        """Return the class if it exists and is free, else None."""
        return (
            self.db.query(ClassModel)
            .filter(ClassModel.id == class_id, ClassModel.is_free.is_(True))
            .first()
        )

    def list_classes(
        self, teacher_id: Optional[int] = None
    ) -> List[Tuple[ClassModel, Optional[str]]]:
        """List classes with their teacher's name, newest first."""
        query = self.db.query(ClassModel, TeacherModel.name).outerjoin(
            TeacherModel, TeacherModel.id == ClassModel.teacher_id
        )
        if teacher_id is not None:
            query = query.filter(ClassModel.teacher_id == teacher_id)
        return query.order_by(ClassModel.created_at.desc(), ClassModel.id.desc()).all()

    def update_class(self, class_id: int, patch: ClassPatch) -> ClassModel:
        """Apply a partial update to a class.

        Changing the price re-derives ``is_free``.

        Raises:
            EmptyPatchError: If the patch sets no field.
            ClassNotFoundError: If the class does not exist.
        """
        changes = patch.changes()
        # title and price are NOT NULL columns
        for key in ("title", "price"):
            if key in changes and changes[key] is None:
                del changes[key]
        if not changes:
            raise EmptyPatchError("No fields to update")

        class_model = self.get_class(class_id)
        for key, value in changes.items():
            setattr(class_model, key, value)
        if "price" in changes:
            class_model.is_free = is_free_price(changes["price"])
        self.db.commit()
        self.db.refresh(class_model)
        logger.info("Updated class %s: %s", class_id, sorted(changes))
        return class_model

    def delete_class(self, class_id: int) -> None:
        """Delete a class together with its access codes and enrollments.

        Raises:
            ClassNotFoundError: If class not found.
        """
        class_model = self.get_class(class_id)
        self.db.delete(class_model)
        self.db.commit()
        logger.info("Deleted class: %s", class_id)

    def count_classes(self) -> int:
        return self.db.query(ClassModel).count()

    def teacher_name(self, class_model: ClassModel) -> Optional[str]:
        return class_model.teacher.name if class_model.teacher else None

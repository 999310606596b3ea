"""Access code persistence.

The lookup and mark operations never commit: they run inside the transaction
owned by the caller (see ``RedemptionService``). Only ``create_code`` commits,
since issuing a code is a standalone administrative action.
"""

import logging
import uuid
from datetime import datetime
from decimal import Decimal
from typing import List, Optional, Tuple

import pytz
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from config import ACCESS_CODE_LENGTH
from models.access_code import AccessCodeModel
from models.class_model import ClassModel
from models.user import UserModel

logger = logging.getLogger(__name__)

# Attempts at drawing a fresh code before giving up on collisions
MAX_CODE_ATTEMPTS = 5


def normalize_code(code: Optional[str]) -> str:
    """Normalize a human-entered code: surrounding whitespace and case."""
    if not code:
        return ""
    return code.strip().upper()


def generate_code(length: int = ACCESS_CODE_LENGTH) -> str:
    return uuid.uuid4().hex[:length].upper()


def mask_code(code: Optional[str], visible: int = 2) -> str:
    """Hide all but the last few characters of a code for log output."""
    if not code:
        return ""
    return "*" * max(len(code) - visible, 0) + code[-visible:]


class AccessCodeStore:
    """Reads and writes access code rows through an injected session."""

    def __init__(self, db: Session):
        self.db = db

    def create_code(self, class_id: int, price: Decimal) -> AccessCodeModel:
        """Issue a new unused access code for a class.

        Args:
            class_id: Class the code unlocks.
            price: Informational price of the code.

        Returns:
            The persisted AccessCodeModel.

        Raises:
            IntegrityError: If no unique code could be drawn.
        """
        for attempt in range(1, MAX_CODE_ATTEMPTS + 1):
            model = AccessCodeModel(
                code=generate_code(),
                class_id=class_id,
                price=price,
                is_used=False,
                created_at=datetime.now(pytz.utc).isoformat(),
            )
            self.db.add(model)
            try:
                self.db.commit()
            except IntegrityError:
                self.db.rollback()
                if attempt == MAX_CODE_ATTEMPTS:
                    raise
                logger.warning("Access code collision, drawing again (attempt %d)", attempt)
                continue
            self.db.refresh(model)
            logger.info(
                "Created access code %s (%s) for class %s", model.id, mask_code(model.code), class_id
            )
            return model

    def get_by_code(self, code: str) -> Optional[AccessCodeModel]:
        return (
            self.db.query(AccessCodeModel)
            .filter(AccessCodeModel.code == normalize_code(code))
            .first()
        )

    def get_unused_for_update(self, code: str) -> Optional[AccessCodeModel]:
        """Fetch an unused code and lock its row until the transaction ends.

        Dialects without row locks (SQLite) drop the FOR UPDATE clause; the
        guarded update in ``mark_used`` still prevents a double redemption.
        """
        return (
            self.db.query(AccessCodeModel)
            .filter(
                AccessCodeModel.code == code,
                AccessCodeModel.is_used.is_(False),
            )
            .with_for_update()
            .first()
        )

    def mark_used(self, access_code: AccessCodeModel, user_id: int) -> bool:
        """Flip an access code to used, only if it is still unused.

        Returns:
            True if this call consumed the code, False if another transaction
            already did.
        """
        updated = (
            self.db.query(AccessCodeModel)
            .filter(
                AccessCodeModel.id == access_code.id,
                AccessCodeModel.is_used.is_(False),
            )
            .update(
                {
                    AccessCodeModel.is_used: True,
                    AccessCodeModel.used_by: user_id,
                    AccessCodeModel.used_at: datetime.now(pytz.utc).isoformat(),
                },
                synchronize_session=False,
            )
        )
        self.db.expire(access_code)
        return updated == 1

    def list_codes(self) -> List[Tuple[AccessCodeModel, Optional[str], Optional[str]]]:
        """List all codes with their class title and redeeming user's name."""
        return (
            self.db.query(AccessCodeModel, ClassModel.title, UserModel.name)
            .join(ClassModel, ClassModel.id == AccessCodeModel.class_id)
            .outerjoin(UserModel, UserModel.id == AccessCodeModel.used_by)
            .order_by(AccessCodeModel.created_at.desc(), AccessCodeModel.id.desc())
            .all()
        )

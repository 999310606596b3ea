"""Access code redemption.

Redeeming a code consumes it and enrolls the user in the code's class. Both
writes happen in one database transaction: either the code is marked used
and the enrollment exists, or neither change is visible.
"""

import logging
from typing import Optional

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from core.exceptions import (
    AlreadyEnrolledError,
    ClassAccessError,
    InvalidOrUsedCodeError,
    StoreError,
)
from schemas.enrollment import RedemptionResult
from utils.access_code_store import AccessCodeStore, mask_code, normalize_code
from utils.enrollment_store import EnrollmentStore

logger = logging.getLogger(__name__)


class RedemptionService:
    """Redeems access codes against an injected session and stores."""

    def __init__(
        self,
        db: Session,
        access_codes: Optional[AccessCodeStore] = None,
        enrollments: Optional[EnrollmentStore] = None,
    ):
        """Initialize RedemptionService.

        Args:
            db: SQLAlchemy Session owning the transaction.
            access_codes: Access code store; defaults to one over ``db``.
            enrollments: Enrollment store; defaults to one over ``db``.
        """
        self.db = db
        self.access_codes = access_codes or AccessCodeStore(db)
        self.enrollments = enrollments or EnrollmentStore(db)

    def redeem(self, user_id: int, code: str) -> RedemptionResult:
        """Consume an access code and enroll the user in its class.

        Args:
            user_id: ID of the authenticated user.
            code: Code as entered by the user; case and surrounding
                whitespace are ignored.

        Returns:
            RedemptionResult carrying the unlocked class ID.

        Raises:
            InvalidOrUsedCodeError: If the code does not exist or is used.
            AlreadyEnrolledError: If the user already has the class.
            StoreError: If the database fails; nothing was changed.
        """
        normalized = normalize_code(code)
        if not normalized:
            raise InvalidOrUsedCodeError(code)
        masked = mask_code(normalized)

        try:
            access_code = self.access_codes.get_unused_for_update(normalized)
            if access_code is None:
                raise InvalidOrUsedCodeError(normalized)

            class_id = access_code.class_id
            if self.enrollments.exists(user_id, class_id):
                raise AlreadyEnrolledError(user_id, class_id)

            if not self.access_codes.mark_used(access_code, user_id):
                # Lost the race to a concurrent redemption
                raise InvalidOrUsedCodeError(normalized)

            try:
                self.enrollments.add(user_id, class_id)
            except IntegrityError as exc:
                raise AlreadyEnrolledError(user_id, class_id) from exc

            self.db.commit()
        except ClassAccessError as exc:
            self.db.rollback()
            logger.info("Redemption of %s by user %s refused: %s", masked, user_id, exc)
            raise
        except SQLAlchemyError as exc:
            self.db.rollback()
            logger.exception("Redemption of %s by user %s failed", masked, user_id)
            raise StoreError("Database error during redemption") from exc

        logger.info("User %s redeemed %s for class %s", user_id, masked, class_id)
        return RedemptionResult(class_id=class_id)

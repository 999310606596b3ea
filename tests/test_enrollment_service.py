"""Tests for FreeEnrollmentService."""

from decimal import Decimal

import pytest
from sqlalchemy.exc import OperationalError

from core.exceptions import AlreadyEnrolledError, ClassNotFoundOrNotFreeError, StoreError
from models.enrollment import EnrollmentModel
from utils.enrollment_service import FreeEnrollmentService
from utils.enrollment_store import EnrollmentStore
from utils.redemption_service import RedemptionService


class BlindEnrollmentStore(EnrollmentStore):
    """Enrollment store that never sees existing rows, as in a lost race."""

    def exists(self, user_id, class_id):
        return False


class BrokenEnrollmentStore(EnrollmentStore):
    def add(self, user_id, class_id):
        raise OperationalError("INSERT INTO user_classes", {}, Exception("database is locked"))


def _rows(db, user_id, class_id):
    return (
        db.query(EnrollmentModel)
        .filter(EnrollmentModel.user_id == user_id, EnrollmentModel.class_id == class_id)
        .count()
    )


class TestEnrollFree:
    """Tests for enroll_free."""

    def test_enroll_then_duplicate(self, db, make_user, make_class) -> None:
        """Second enrollment in the same free class is refused."""
        make_user(user_id=3)
        make_class(class_id=5)
        service = FreeEnrollmentService(db)

        assert service.enroll_free(3, 5).class_id == 5
        with pytest.raises(AlreadyEnrolledError):
            service.enroll_free(3, 5)

        assert _rows(db, 3, 5) == 1

    def test_paid_class_is_refused(self, db, make_user, make_class) -> None:
        """Paid classes cannot be joined for free."""
        user = make_user()
        class_model = make_class(price=Decimal("49.99"))

        with pytest.raises(ClassNotFoundOrNotFreeError):
            FreeEnrollmentService(db).enroll_free(user.id, class_model.id)
        assert _rows(db, user.id, class_model.id) == 0

    def test_paid_class_refused_even_when_enrolled(
        self, db, make_user, make_class, make_code
    ) -> None:
        """Enrollment history does not change the not-free answer."""
        user = make_user()
        class_model = make_class(price=Decimal("10"))
        make_code(class_model, "PAID0001")
        RedemptionService(db).redeem(user.id, "PAID0001")

        with pytest.raises(ClassNotFoundOrNotFreeError):
            FreeEnrollmentService(db).enroll_free(user.id, class_model.id)

    def test_missing_class_is_refused(self, db, make_user) -> None:
        """Unknown class IDs are reported like paid classes."""
        user = make_user()
        with pytest.raises(ClassNotFoundOrNotFreeError):
            FreeEnrollmentService(db).enroll_free(user.id, 999)

    def test_unique_constraint_backstop(self, db, make_user, make_class) -> None:
        """A duplicate insert that slips past the check becomes AlreadyEnrolled."""
        user = make_user()
        class_model = make_class()
        FreeEnrollmentService(db).enroll_free(user.id, class_model.id)

        service = FreeEnrollmentService(db, enrollments=BlindEnrollmentStore(db))
        with pytest.raises(AlreadyEnrolledError):
            service.enroll_free(user.id, class_model.id)

        assert _rows(db, user.id, class_model.id) == 1

    def test_store_failure(self, db, make_user, make_class) -> None:
        """Database errors surface as StoreError."""
        user = make_user()
        class_model = make_class()
        service = FreeEnrollmentService(db, enrollments=BrokenEnrollmentStore(db))

        with pytest.raises(StoreError):
            service.enroll_free(user.id, class_model.id)
        assert _rows(db, user.id, class_model.id) == 0


class TestAccessQueries:
    """Tests for has_access and list_my_classes."""

    def test_has_access(self, db, make_user, make_class) -> None:
        user = make_user()
        class_model = make_class()
        service = FreeEnrollmentService(db)

        assert service.has_access(user.id, class_model.id) is False
        service.enroll_free(user.id, class_model.id)
        assert service.has_access(user.id, class_model.id) is True

    def test_list_my_classes(self, db, make_user, make_class, make_teacher) -> None:
        """Enrolled classes carry their teacher name."""
        user = make_user()
        teacher = make_teacher(name="Ada Lovelace")
        first = make_class(title="Algebra", teacher=teacher)
        make_class(title="Not mine")
        service = FreeEnrollmentService(db)
        service.enroll_free(user.id, first.id)

        classes = service.list_my_classes(user.id)

        assert [c.title for c in classes] == ["Algebra"]
        assert classes[0].teacher_name == "Ada Lovelace"
        assert classes[0].enrolled_at

"""User management utilities.

This module provides user management functionality including user storage,
password hashing, and seeding of the administrator account.
"""

import logging
from datetime import datetime
from typing import List, Optional

import bcrypt
import pytz
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from config import (
    BCRYPT_ROUNDS,
    DEFAULT_ADMIN_EMAIL,
    DEFAULT_ADMIN_NAME,
    DEFAULT_ADMIN_PASSWORD,
)
from models.access_code import AccessCodeModel
from models.enrollment import EnrollmentModel
from models.user import UserModel
from schemas.user import RegisterRequest, StudentPatch, User
from utils.converters import model_to_user

logger = logging.getLogger(__name__)

# bcrypt only looks at the first 72 bytes of a password
BCRYPT_MAX_BYTES = 72


class UserNotFoundError(Exception):
    """Exception raised when a user is not found."""

    pass


class UserAlreadyExistsError(Exception):
    """Exception raised when trying to create a user that already exists."""

    pass


class UserManager:
    """Manages user data persistence and operations using SQLAlchemy."""

    def __init__(self, db: Session):
        """Initialize UserManager.

        Args:
            db: SQLAlchemy Session.
        """
        self.db = db

    def hash_password(self, password: str) -> str:
        """Hash a password using bcrypt.

        Args:
            password: Plain text password.

        Returns:
            Hashed password (bcrypt hash string).
        """
        password_bytes = password.encode("utf-8")[:BCRYPT_MAX_BYTES]
        salt = bcrypt.gensalt(rounds=BCRYPT_ROUNDS)
        return bcrypt.hashpw(password_bytes, salt).decode("utf-8")

    def verify_password(self, plain_password: str, hashed_password: str) -> bool:
        """Verify a password against a bcrypt hash.

        Args:
            plain_password: Plain text password to verify.
            hashed_password: Bcrypt hash string to verify against.

        Returns:
            True if password matches, False otherwise.
        """
        password_bytes = plain_password.encode("utf-8")[:BCRYPT_MAX_BYTES]
        try:
            return bcrypt.checkpw(password_bytes, hashed_password.encode("utf-8"))
        except ValueError as e:
            logger.error("Password verification error: %s", e)
            return False

    def create_user(
        self,
        email: str,
        password: str,
        name: str,
        role: str = "student",
        country: Optional[str] = None,
        phone_number: Optional[str] = None,
        guardian_phone: Optional[str] = None,
        current_location: Optional[str] = None,
    ) -> User:
        """Create a new user.

        Args:
            email: Unique login email.
            password: Plain text password.
            name: Full name.
            role: User role ('admin' or 'student').
            country: Optional country.
            phone_number: Optional phone number.
            guardian_phone: Optional guardian phone number.
            current_location: Optional current location.

        Returns:
            Created User object.

        Raises:
            UserAlreadyExistsError: If the email is already registered.
        """
        existing = self.db.query(UserModel).filter(UserModel.email == email).first()
        if existing:
            raise UserAlreadyExistsError("Email already exists")

        model = UserModel(
            email=email,
            password_hash=self.hash_password(password),
            name=name,
            role=role,
            country=country,
            phone_number=phone_number,
            guardian_phone=guardian_phone,
            current_location=current_location,
            created_at=datetime.now(pytz.utc).isoformat(),
        )

        # Two concurrent registrations can both pass the check above; the
        # unique constraint on email decides.
        try:
            self.db.add(model)
            self.db.commit()
            self.db.refresh(model)
        except IntegrityError as e:
            self.db.rollback()
            raise UserAlreadyExistsError("Email already exists") from e

        logger.info("Created user %s with role %s", model.id, role)
        return model_to_user(model)

    def register_student(self, req: RegisterRequest) -> User:
        return self.create_user(
            email=req.email,
            password=req.password,
            name=req.name,
            role="student",
            country=req.country,
            phone_number=req.phone_number,
            guardian_phone=req.guardian_phone,
            current_location=req.current_location,
        )

    def authenticate(self, email: str, password: str) -> Optional[User]:
        """Return the user if the credentials match, None otherwise."""
        model = self.db.query(UserModel).filter(UserModel.email == email).first()
        if model is None or not self.verify_password(password, model.password_hash):
            return None
        return model_to_user(model)

    def get_user_by_id(self, user_id: int) -> User:
        """Get a user by ID.

        Raises:
            UserNotFoundError: If no such user exists.
        """
        model = self.db.query(UserModel).filter(UserModel.id == user_id).first()
        if not model:
            raise UserNotFoundError(user_id)
        return model_to_user(model)

    def get_user_by_email(self, email: str) -> Optional[User]:
        model = self.db.query(UserModel).filter(UserModel.email == email).first()
        if model:
            return model_to_user(model)
        return None

    def count_students(self) -> int:
        return self.db.query(UserModel).filter(UserModel.role == "student").count()

    def list_students(self) -> List[User]:
        """List student accounts, newest first."""
        models = (
            self.db.query(UserModel)
            .filter(UserModel.role == "student")
            .order_by(UserModel.created_at.desc(), UserModel.id.desc())
            .all()
        )
        return [model_to_user(model) for model in models]

    def _get_student(self, student_id: int) -> UserModel:
        model = (
            self.db.query(UserModel)
            .filter(UserModel.id == student_id, UserModel.role == "student")
            .first()
        )
        if not model:
            raise UserNotFoundError(student_id)
        return model

    def update_student(self, student_id: int, patch: StudentPatch) -> User:
        """Apply a partial update to a student account.

        A new password is hashed before it is stored.

        Args:
            student_id: ID of the student to update.
            patch: Fields to change.

        Returns:
            The updated User.

        Raises:
            ValueError: If the patch sets no field.
            UserNotFoundError: If no student has this ID.
            UserAlreadyExistsError: If the email belongs to another user.
        """
        changes = patch.changes()
        # email, name and password_hash are NOT NULL columns
        for key in ("email", "name", "password"):
            if key in changes and changes[key] is None:
                del changes[key]
        if not changes:
            raise ValueError("No fields to update")

        model = self._get_student(student_id)
        if "email" in changes:
            taken = (
                self.db.query(UserModel)
                .filter(UserModel.email == changes["email"], UserModel.id != student_id)
                .first()
            )
            if taken:
                raise UserAlreadyExistsError("Email already exists")

        for key, value in changes.items():
            if key == "password":
                model.password_hash = self.hash_password(value)
            else:
                setattr(model, key, value)

        try:
            self.db.commit()
        except IntegrityError as e:
            self.db.rollback()
            raise UserAlreadyExistsError("Email already exists") from e
        self.db.refresh(model)

        logger.info("Updated student %s: %s", student_id, sorted(changes))
        return model_to_user(model)

    def delete_student(self, student_id: int) -> None:
        """Delete a student together with their enrollments.

        Codes the student redeemed stay used; only the link to the account
        is cleared.

        Raises:
            UserNotFoundError: If no student has this ID.
        """
        model = self._get_student(student_id)
        self.db.query(AccessCodeModel).filter(AccessCodeModel.used_by == student_id).update(
            {AccessCodeModel.used_by: None}, synchronize_session=False
        )
        self.db.query(EnrollmentModel).filter(EnrollmentModel.user_id == student_id).delete(
            synchronize_session=False
        )
        self.db.delete(model)
        self.db.commit()
        logger.info("Deleted student: %s", student_id)

    def ensure_default_admin(self) -> None:
        """Seed the administrator account if it does not exist yet."""
        if self.get_user_by_email(DEFAULT_ADMIN_EMAIL) is not None:
            return
        try:
            self.create_user(
                email=DEFAULT_ADMIN_EMAIL,
                password=DEFAULT_ADMIN_PASSWORD,
                name=DEFAULT_ADMIN_NAME,
                role="admin",
            )
        except UserAlreadyExistsError:
            # Another worker seeded it first
            return
        logger.info("Seeded default admin account %s", DEFAULT_ADMIN_EMAIL)

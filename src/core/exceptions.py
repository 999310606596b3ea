"""Custom exception classes for the class access backend.

This module defines application-specific exceptions following Google Python
Style Guide.
"""


class ClassAccessError(Exception):
    """Base exception for all class access errors."""

    pass


class InvalidOrUsedCodeError(ClassAccessError):
    """Raised when an access code does not exist or was already redeemed."""

    def __init__(self, code: str):
        """Initialize the exception.

        Args:
            code: The access code that could not be redeemed.
        """
        self.code = code
        super().__init__("Invalid or already used code")


class AlreadyEnrolledError(ClassAccessError):
    """Raised when a user is already enrolled in the requested class."""

    def __init__(self, user_id: int, class_id: int):
        """Initialize the exception.

        Args:
            user_id: The ID of the enrolled user.
            class_id: The ID of the class.
        """
        self.user_id = user_id
        self.class_id = class_id
        super().__init__(f"User {user_id} is already enrolled in class {class_id}")


class ClassNotFoundOrNotFreeError(ClassAccessError):
    """Raised when a free enrollment targets a missing or paid class."""

    def __init__(self, class_id: int):
        """Initialize the exception.

        Args:
            class_id: The ID of the requested class.
        """
        self.class_id = class_id
        super().__init__("Class not found or not free")


class StoreError(ClassAccessError):
    """Raised when the database fails while a transaction is in progress.

    The transaction has always been rolled back by the time this is raised.
    """

    pass

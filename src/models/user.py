"""User database model.

This module defines the User database model using SQLAlchemy.
"""

from sqlalchemy import Column, Integer, String
from .base import Base


class UserModel(Base):
    """User database model."""

    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    email = Column(String, unique=True, index=True, nullable=False)
    password_hash = Column(String, nullable=False)
    name = Column(String, nullable=False)
    role = Column(String, nullable=False, default="student")  # 'admin' or 'student'
    country = Column(String, nullable=True)
    phone_number = Column(String, nullable=True)
    guardian_phone = Column(String, nullable=True)
    current_location = Column(String, nullable=True)
    created_at = Column(String, nullable=False)  # ISO format string

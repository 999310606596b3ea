"""Access code database model.

An access code unlocks one paid class for exactly one user. ``used_by`` and
``used_at`` are set together with ``is_used`` and stay NULL while the code is
unused. ``used_by`` is cleared again if the redeeming account is deleted;
the code stays used.
"""

from sqlalchemy import Boolean, Column, ForeignKey, Integer, Numeric, String
from sqlalchemy.orm import relationship
from .base import Base


class AccessCodeModel(Base):
    """Access code database model."""

    __tablename__ = "access_codes"

    id = Column(Integer, primary_key=True, index=True)
    code = Column(String, unique=True, index=True, nullable=False)
    class_id = Column(
        Integer, ForeignKey("classes.id", ondelete="CASCADE"), index=True, nullable=False
    )
    price = Column(Numeric(10, 2), nullable=False)
    is_used = Column(Boolean, nullable=False, default=False)
    used_by = Column(Integer, ForeignKey("users.id", ondelete="SET NULL"), nullable=True)
    used_at = Column(String, nullable=True)  # ISO format string
    created_at = Column(String, nullable=False)  # ISO format string

    class_ = relationship("ClassModel", back_populates="access_codes")

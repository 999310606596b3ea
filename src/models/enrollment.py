from sqlalchemy import Column, ForeignKey, Integer, String, UniqueConstraint
from sqlalchemy.orm import relationship
from .base import Base


class EnrollmentModel(Base):
    __tablename__ = "user_classes"
    __table_args__ = (
        UniqueConstraint("user_id", "class_id", name="uq_user_classes_user_class"),
    )

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), index=True, nullable=False)
    class_id = Column(Integer, ForeignKey("classes.id", ondelete="CASCADE"), index=True, nullable=False)
    enrolled_at = Column(String, nullable=False)

    class_ = relationship("ClassModel", back_populates="enrollments")

from sqlalchemy import Boolean, Column, ForeignKey, Integer, Numeric, String, Text
from sqlalchemy.orm import relationship
from .base import Base


class ClassModel(Base):
    __tablename__ = "classes"

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String, nullable=False)
    description = Column(Text, nullable=True)
    teacher_id = Column(Integer, ForeignKey("teachers.id"), index=True, nullable=True)
    video_url = Column(String, nullable=True)
    thumbnail = Column(String, nullable=True)
    price = Column(Numeric(10, 2), nullable=False, default=0)
    is_free = Column(Boolean, nullable=False, default=True)
    created_at = Column(String, nullable=False)

    teacher = relationship("TeacherModel", back_populates="classes")
    access_codes = relationship(
        "AccessCodeModel",
        back_populates="class_",
        cascade="all, delete-orphan",
    )
    enrollments = relationship(
        "EnrollmentModel",
        back_populates="class_",
        cascade="all, delete-orphan",
    )

from sqlalchemy import Column, Integer, String, Text
from sqlalchemy.orm import relationship
from .base import Base


class TeacherModel(Base):
    __tablename__ = "teachers"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False)
    bio = Column(Text, nullable=True)
    subject = Column(String, nullable=False)
    photo = Column(String, nullable=True)
    created_at = Column(String, nullable=False)

    classes = relationship("ClassModel", back_populates="teacher")

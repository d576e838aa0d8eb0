from sqlalchemy import Column, Integer, String, DateTime, func
from sqlalchemy.orm import relationship
from taskboard.db.base import Base

class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    full_name = Column(String, nullable=False)
    username = Column(String, nullable=False, unique=True, index=True)
    email = Column(String, nullable=False, unique=True, index=True)
    password_hash = Column(String, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    cards = relationship("Card", back_populates="owner", cascade="all, delete-orphan")

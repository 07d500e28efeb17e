"""
User model for the NicheGen backend.
"""

from sqlalchemy import Column, Integer, String, DateTime
from sqlalchemy.orm import relationship

from . import Base, utcnow


class User(Base):
    """SQLAlchemy model for the users table."""
    __tablename__ = 'users'

    user_id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(100), nullable=False)
    email = Column(String(255), unique=True, nullable=False, index=True)
    hashed_password = Column(String(255), nullable=False)
    created_at = Column(DateTime, default=utcnow)

    # Relationships
    chats = relationship("Chat", back_populates="user", cascade="all, delete-orphan")

    def to_public_dict(self):
        return {'id': self.user_id, 'name': self.name, 'email': self.email}

    def __repr__(self):
        return f"<User(user_id={self.user_id}, email='{self.email}')>"

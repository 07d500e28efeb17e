"""
Chat and message models for the NicheGen backend.

A chat is the transcript of one conversation with the generation pipeline.
Messages are append-only; their position is the order in which they are
replayed to the model as memory.
"""

import enum
import uuid

from sqlalchemy import Column, Integer, String, DateTime, Text, JSON, ForeignKey
from sqlalchemy.orm import relationship, validates

from . import Base, utcnow

DEFAULT_CHAT_TITLE = "New Synthesis"


class MessageRole(str, enum.Enum):
    """Roles that may be persisted in a chat transcript."""
    USER = 'user'
    ASSISTANT = 'assistant'


def _isoformat(value):
    return value.isoformat() if value else None


class Chat(Base):
    """SQLAlchemy model for the chats table."""
    __tablename__ = 'chats'

    chat_id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    user_id = Column(Integer, ForeignKey('users.user_id', ondelete='CASCADE'), nullable=False, index=True)
    title = Column(String(255), nullable=False, default=DEFAULT_CHAT_TITLE)
    created_at = Column(DateTime, default=utcnow)
    updated_at = Column(DateTime, default=utcnow, index=True)

    # Relationships
    user = relationship("User", back_populates="chats")
    messages = relationship(
        "ChatMessage",
        back_populates="chat",
        order_by="ChatMessage.position",
        cascade="all, delete-orphan",
        lazy="selectin",
    )

    def to_summary(self):
        """Sidebar representation without the message bodies."""
        return {
            'id': self.chat_id,
            'title': self.title,
            'createdAt': _isoformat(self.created_at),
            'updatedAt': _isoformat(self.updated_at),
            'messageCount': len(self.messages),
        }

    def to_dict(self):
        data = self.to_summary()
        data['messages'] = [message.to_dict() for message in self.messages]
        return data

    def __repr__(self):
        return f"<Chat(chat_id='{self.chat_id}', user_id={self.user_id})>"


class ChatMessage(Base):
    """
    A single entry of a chat transcript.

    ``sources`` holds the ``{title, url}`` citations returned by the web search
    and is only populated on assistant messages.
    """
    __tablename__ = 'chat_messages'

    id = Column(Integer, primary_key=True, autoincrement=True)
    chat_id = Column(String(36), ForeignKey('chats.chat_id', ondelete='CASCADE'), nullable=False, index=True)
    position = Column(Integer, nullable=False)
    role = Column(String(20), nullable=False)
    content = Column(Text, nullable=False)
    sources = Column(JSON, nullable=True)
    created_at = Column(DateTime, default=utcnow)

    chat = relationship("Chat", back_populates="messages")

    @validates('role')
    def validate_role(self, key, value):
        return MessageRole(value).value

    def to_dict(self):
        return {
            'role': self.role,
            'content': self.content,
            'sources': list(self.sources or []),
            'timestamp': _isoformat(self.created_at),
        }

    def __repr__(self):
        return f"<ChatMessage(chat_id='{self.chat_id}', position={self.position}, role='{self.role}')>"

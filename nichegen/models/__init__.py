"""
Database models for the NicheGen backend.

This package contains SQLAlchemy models representing database tables.
Import all models here to make them available when importing from the models package.
"""

from datetime import datetime, timezone

from sqlalchemy.orm import declarative_base

# Create the Base class for all models
Base = declarative_base()


def utcnow() -> datetime:
    """Naive UTC timestamp, matching what SQLite hands back."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


# Import all models to make them available when importing from the models package
from .user import User  # noqa: E402
from .chat import Chat, ChatMessage, MessageRole  # noqa: E402

# Export all models
__all__ = [
    'Base',
    'User',
    'Chat',
    'ChatMessage',
    'MessageRole',
    'utcnow',
]

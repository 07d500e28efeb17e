"""
Conversation store for the NicheGen backend.

Owns chat transcripts. Every lookup is scoped to the owner: a chat that
belongs to someone else is reported exactly like a chat that doesn't exist.
"""

import logging
import uuid
from typing import Dict, List, Optional, Sequence

from sqlalchemy.orm import sessionmaker

from ..models import Chat, ChatMessage, MessageRole, utcnow
from ..models.chat import DEFAULT_CHAT_TITLE
from ..models.connection import get_db

logger = logging.getLogger(__name__)


class ConversationStore:
    """
    CRUD over chats and their messages.

    Objects returned here are detached from their database session but fully
    loaded, so callers can read and extend them and hand them back to ``save``.
    """

    def __init__(self, session_factory: sessionmaker):
        self._session_factory = session_factory

    def create(self, owner_id: int, title: str) -> Chat:
        """New empty chat. Nothing is written until ``save``."""
        now = utcnow()
        return Chat(
            chat_id=str(uuid.uuid4()),
            user_id=owner_id,
            title=(title or DEFAULT_CHAT_TITLE)[:255],
            created_at=now,
            updated_at=now,
            messages=[],
        )

    def find_owned(self, owner_id: int, chat_id: str) -> Optional[Chat]:
        if not chat_id:
            return None
        with get_db(self._session_factory) as db:
            return db.query(Chat).filter(
                Chat.chat_id == chat_id,
                Chat.user_id == owner_id
            ).first()

    def list_owned(self, owner_id: int) -> List[Chat]:
        """Chats of one user, most recently updated first."""
        with get_db(self._session_factory) as db:
            return db.query(Chat).filter(Chat.user_id == owner_id).order_by(
                Chat.updated_at.desc(),
                Chat.created_at.desc(),
                Chat.chat_id,
            ).all()

    def append(self,
               chat: Chat,
               role: str,
               content: str,
               sources: Optional[Sequence[Dict[str, str]]] = None) -> ChatMessage:
        """Add a message at the end of the transcript (in memory only)."""
        message = ChatMessage(
            role=MessageRole(role).value,
            content=content,
            sources=[dict(source) for source in sources] if sources else None,
            position=len(chat.messages),
            created_at=utcnow(),
        )
        chat.messages.append(message)
        return message

    def save(self, chat: Chat) -> Chat:
        """
        Persist the chat and any messages appended since it was loaded, in one
        transaction. Concurrent saves of the same chat are last-write-wins.
        """
        with get_db(self._session_factory) as db:
            db.add(chat)
        logger.info(f"Saved chat {chat.chat_id} with {len(chat.messages)} messages")
        return chat

    def delete_owned(self, owner_id: int, chat_id: str) -> bool:
        """Returns True if a chat was removed."""
        with get_db(self._session_factory) as db:
            chat = db.query(Chat).filter(
                Chat.chat_id == chat_id,
                Chat.user_id == owner_id
            ).first()
            if not chat:
                return False
            db.delete(chat)

        logger.info(f"Deleted chat {chat_id} for user {owner_id}")
        return True

"""
Conversation memory for the chat assistant.
Keeps one UserContext per chat session in a pluggable store; callers
own the store and pass it in explicitly.
"""

import logging
from datetime import datetime, timezone
from functools import lru_cache
from typing import Any, Dict, Mapping, Optional

from pydantic import ValidationError
from pymongo.collection import Collection
from pymongo.errors import PyMongoError

from briki.assistant.context import UserContext, extract_context, merge_context
from briki.config import get_settings
from briki.core.mongodb_client import Collections, get_collection


logger = logging.getLogger(__name__)


class ContextStore:
    """Persistence interface for user contexts, keyed by session id."""

    def load(self, session_id: str) -> Optional[UserContext]:
        raise NotImplementedError

    def save(self, session_id: str, context: UserContext) -> None:
        raise NotImplementedError

    def clear(self, session_id: str) -> None:
        raise NotImplementedError


class InMemoryContextStore(ContextStore):
    """Process-local store, used for development and tests."""

    def __init__(self):
        self._contexts: Dict[str, UserContext] = {}

    def load(self, session_id: str) -> Optional[UserContext]:
        return self._contexts.get(session_id)

    def save(self, session_id: str, context: UserContext) -> None:
        self._contexts[session_id] = context

    def clear(self, session_id: str) -> None:
        self._contexts.pop(session_id, None)


class MongoContextStore(ContextStore):
    """Stores one document per session in the user_contexts collection."""

    def __init__(self, collection: Optional[Collection] = None):
        self.collection = collection if collection is not None else get_collection(
            Collections.USER_CONTEXTS
        )

    def load(self, session_id: str) -> Optional[UserContext]:
        doc = self.collection.find_one({"_id": session_id})
        if not doc:
            return None
        return UserContext.model_validate(doc.get("context", {}))

    def save(self, session_id: str, context: UserContext) -> None:
        self.collection.replace_one(
            {"_id": session_id},
            {
                "_id": session_id,
                "context": context.model_dump(exclude_none=True),
                "updated_at": datetime.now(timezone.utc),
            },
            upsert=True,
        )

    def clear(self, session_id: str) -> None:
        self.collection.delete_one({"_id": session_id})


class ConversationMemory:
    """
    Maintains the user context across the messages of a chat session.
    """

    def __init__(self, store: ContextStore):
        self.store = store

    def get_context(self, session_id: str) -> UserContext:
        """
        Stored context for a session.
        A context that cannot be read is logged and treated as empty.
        """
        try:
            context = self.store.load(session_id)
        except (PyMongoError, ValidationError) as e:
            logger.error(f"Error retrieving saved context for session {session_id}: {e}")
            return UserContext()
        return context or UserContext()

    def update_context(self, session_id: str, updates: Mapping[str, Mapping[str, Any]]) -> UserContext:
        """Merge partial sections into the stored context and save it."""
        context = merge_context(self.get_context(session_id), updates)
        self.store.save(session_id, context)
        return context

    def process_message(self, session_id: str, message: str) -> UserContext:
        """Extract facts from a message, save and return the updated context."""
        context = extract_context(message, self.get_context(session_id))
        self.store.save(session_id, context)
        return context

    def clear_context(self, session_id: str) -> None:
        self.store.clear(session_id)
        logger.info(f"Cleared context for session {session_id}")


@lru_cache()
def get_context_store() -> ContextStore:
    """Get the configured context store (cached)."""
    settings = get_settings()
    if settings.context_store.lower() == "mongodb":
        return MongoContextStore()
    if settings.context_store.lower() != "memory":
        logger.warning(f"Unknown context store '{settings.context_store}', using in-memory store")
    return InMemoryContextStore()


def get_conversation_memory() -> ConversationMemory:
    return ConversationMemory(get_context_store())

"""
Chat assistant helpers: context extraction and conversation memory.
"""

from .context import (
    UserContext,
    extract_context,
    merge_context,
    is_generic_greeting,
    has_insurance_intent,
    format_user_context,
)
from .memory import (
    ContextStore,
    InMemoryContextStore,
    MongoContextStore,
    ConversationMemory,
    get_context_store,
    get_conversation_memory,
)

__all__ = [
    "UserContext",
    "extract_context",
    "merge_context",
    "is_generic_greeting",
    "has_insurance_intent",
    "format_user_context",
    "ContextStore",
    "InMemoryContextStore",
    "MongoContextStore",
    "ConversationMemory",
    "get_context_store",
    "get_conversation_memory",
]

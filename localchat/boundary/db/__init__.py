"""
Database boundary layer: ORM models, CRUD operations, and connection management.

Exports:
  - Base, TimestampMixin, now_ms: Model building blocks
  - get_async_engine(), get_async_session_factory(), get_async_db(): Connection management
  - create_all_tables(): Schema initialization
  - SessionModel, MessageModel, ContextModel, UserFactModel, ReferenceContextModel
  - session_crud, message_crud, context_crud, user_fact_crud, reference_crud

Dependencies: sqlalchemy, aiosqlite, localchat.configs
System role: SQLite adapter persisting sessions, messages, contexts,
user facts and reference contexts.
"""

from localchat.boundary.db.base import Base, TimestampMixin, now_ms
from localchat.boundary.db.connection import (
    create_all_tables,
    get_async_db,
    get_async_engine,
    get_async_session_factory,
)
from localchat.boundary.db.models import (
    ContextModel,
    MessageModel,
    MessageRole,
    ReferenceContextModel,
    SessionModel,
    UserFactModel,
)
from localchat.boundary.db.CRUD import (
    context_crud,
    message_crud,
    reference_crud,
    session_crud,
    user_fact_crud,
)

__all__ = [
    # Base classes
    "Base",
    "TimestampMixin",
    "now_ms",
    # Connection
    "create_all_tables",
    "get_async_db",
    "get_async_engine",
    "get_async_session_factory",
    # Models
    "SessionModel",
    "MessageModel",
    "MessageRole",
    "ContextModel",
    "UserFactModel",
    "ReferenceContextModel",
    # CRUD singletons
    "session_crud",
    "message_crud",
    "context_crud",
    "user_fact_crud",
    "reference_crud",
]

"""
CRUD operations for database models.

Exports base CRUD class and model-specific CRUD implementations
with pre-instantiated singletons for direct use.

Usage:
    from localchat.boundary.db.CRUD import session_crud, message_crud

    # Use singleton instances
    session, created = await session_crud.get_or_create(db, session_id)
"""

from localchat.boundary.db.CRUD.base_crud import BaseCRUD
from localchat.boundary.db.CRUD.context_crud import ContextCRUD, context_crud
from localchat.boundary.db.CRUD.message_crud import MessageCRUD, message_crud
from localchat.boundary.db.CRUD.reference_crud import ReferenceCRUD, reference_crud
from localchat.boundary.db.CRUD.session_crud import SessionCRUD, session_crud
from localchat.boundary.db.CRUD.user_fact_crud import UserFactCRUD, user_fact_crud

__all__ = [
    "BaseCRUD",
    "SessionCRUD",
    "session_crud",
    "MessageCRUD",
    "message_crud",
    "ContextCRUD",
    "context_crud",
    "UserFactCRUD",
    "user_fact_crud",
    "ReferenceCRUD",
    "reference_crud",
]

"""
Database models package.

Exports:
  - SessionModel: Conversation session
  - MessageModel, MessageRole: Chat turns and their role enum
  - ContextModel: Backend continuation token per session
  - UserFactModel: Extracted user facts per session
  - ReferenceContextModel: User-supplied reference text blocks

Dependencies: sqlalchemy, localchat.boundary.db.base
System role: Database model definitions for domain entities
"""

from localchat.boundary.db.models.session_model import SessionModel
from localchat.boundary.db.models.message_model import MessageModel, MessageRole
from localchat.boundary.db.models.context_model import ContextModel
from localchat.boundary.db.models.user_fact_model import UserFactModel
from localchat.boundary.db.models.reference_model import ReferenceContextModel

__all__ = [
    "SessionModel",
    "MessageModel",
    "MessageRole",
    "ContextModel",
    "UserFactModel",
    "ReferenceContextModel",
]

"""
Message ORM model.

Append-only chat turns, ordered by timestamp then id.

Dependencies: sqlalchemy, localchat.boundary.db.base
System role: Conversation history persistence
"""

import enum

from sqlalchemy import BigInteger, ForeignKey, Index, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from localchat.boundary.db.base import Base, now_ms


class MessageRole(str, enum.Enum):
    """Author of a chat turn."""

    USER = "user"
    ASSISTANT = "assistant"


class MessageModel(Base):
    """
    Message ORM model.

    Attributes:
        id: Autoincrement primary key
        session_id: Owning session (FK, cascade delete)
        role: "user" or "assistant"
        content: Message text
        timestamp: Insertion time (epoch ms)
    """

    __tablename__ = "messages"
    __table_args__ = (
        Index("ix_messages_session_order", "session_id", "timestamp", "id"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    session_id: Mapped[str] = mapped_column(
        ForeignKey("sessions.id", ondelete="CASCADE"),
        nullable=False,
    )
    role: Mapped[str] = mapped_column(String(16), nullable=False)
    content: Mapped[str] = mapped_column(Text, nullable=False)
    timestamp: Mapped[int] = mapped_column(BigInteger, nullable=False, default=now_ms)

    session = relationship("SessionModel", back_populates="messages")

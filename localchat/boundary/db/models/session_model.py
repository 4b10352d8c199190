"""
Session ORM model.

Represents a conversation thread identified by a client-chosen id.

Dependencies: sqlalchemy, localchat.boundary.db.base
System role: Session persistence for chat context management
"""

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from localchat.boundary.db.base import Base, TimestampMixin


class SessionModel(Base, TimestampMixin):
    """
    Session ORM model owning messages, rolling context and user facts.

    Cascade delete ensures messages, context and facts disappear with the
    session. Reference contexts are deliberately not related here: their
    table carries no foreign key and rows may outlive the session.

    Attributes:
        id: Opaque client-generated session id
        title: Display title shown in the session list
        created_at: Creation time (epoch ms)
        last_activity: Last activity time (epoch ms), drives the TTL sweep

    Relationships:
        messages: One-to-many with MessageModel (cascade delete)
        context: One-to-one with ContextModel (cascade delete)
        facts: One-to-many with UserFactModel (cascade delete)
    """

    __tablename__ = "sessions"

    id: Mapped[str] = mapped_column(String(255), primary_key=True)
    title: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        default="New Chat",
    )

    # Relationships
    messages = relationship(
        "MessageModel",
        back_populates="session",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
    context = relationship(
        "ContextModel",
        back_populates="session",
        cascade="all, delete-orphan",
        passive_deletes=True,
        uselist=False,
    )
    facts = relationship(
        "UserFactModel",
        back_populates="session",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

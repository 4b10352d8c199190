"""
SQLAlchemy declarative base and common mixins.

Provides base class for all ORM models and the activity timestamp mixin
used by sessions. Timestamps are integer epoch milliseconds, which is also
the wire format of the session export document.

Dependencies: sqlalchemy, localchat.core.clock
System role: Foundation for all database models
"""

from sqlalchemy import BigInteger
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

from localchat.core.clock import now_ms


class Base(DeclarativeBase):
    """
    SQLAlchemy declarative base for ORM model registration.

    All database models inherit from this class to ensure they're
    registered with the metadata and included in table creation.
    """

    pass


class TimestampMixin:
    """
    Mixin providing creation and activity tracking.

    created_at is set once on row creation and never changes.
    last_activity is bumped explicitly by the CRUD layer whenever the
    session sees a message, a context update or a fetch.

    Attributes:
        created_at: Row creation time (epoch ms, immutable)
        last_activity: Last activity time (epoch ms)
    """

    created_at: Mapped[int] = mapped_column(
        BigInteger,
        default=now_ms,
        nullable=False,
    )
    last_activity: Mapped[int] = mapped_column(
        BigInteger,
        default=now_ms,
        nullable=False,
        index=True,
    )

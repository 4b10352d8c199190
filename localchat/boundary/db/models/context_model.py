"""
Context ORM model.

Stores the backend's opaque continuation token, at most one per session.

Dependencies: sqlalchemy, localchat.boundary.db.base
System role: Rolling model state persistence
"""

from sqlalchemy import JSON, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column, relationship

from localchat.boundary.db.base import Base


class ContextModel(Base):
    """
    Context ORM model.

    Attributes:
        session_id: Owning session (PK and FK)
        context: JSON-serialized continuation token (usually a list of ints)
    """

    __tablename__ = "contexts"

    session_id: Mapped[str] = mapped_column(
        ForeignKey("sessions.id", ondelete="CASCADE"),
        primary_key=True,
    )
    context: Mapped[list | None] = mapped_column(JSON, nullable=True)

    session = relationship("SessionModel", back_populates="context")

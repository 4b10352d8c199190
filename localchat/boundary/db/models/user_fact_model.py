"""
User fact ORM model.

Key/value facts extracted from user messages, unique per (session, key).

Dependencies: sqlalchemy, localchat.boundary.db.base
System role: Persistence for remembered user details
"""

from sqlalchemy import BigInteger, ForeignKey, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from localchat.boundary.db.base import Base, now_ms


class UserFactModel(Base):
    """
    User fact ORM model.

    Attributes:
        session_id: Owning session (part of PK, FK)
        key: Fact name, e.g. "name" (part of PK)
        value: Fact value
        timestamp: Last write time (epoch ms)
    """

    __tablename__ = "user_info"

    session_id: Mapped[str] = mapped_column(
        ForeignKey("sessions.id", ondelete="CASCADE"),
        primary_key=True,
    )
    key: Mapped[str] = mapped_column(String(255), primary_key=True)
    value: Mapped[str] = mapped_column(Text, nullable=False)
    timestamp: Mapped[int] = mapped_column(BigInteger, nullable=False, default=now_ms)

    session = relationship("SessionModel", back_populates="facts")

"""
Reference context ORM model.

User-curated text blocks that may be injected into prompts.

Dependencies: sqlalchemy, localchat.boundary.db.base
System role: Reference material persistence
"""

from sqlalchemy import BigInteger, Boolean, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from localchat.boundary.db.base import Base, now_ms


class ReferenceContextModel(Base):
    """
    Reference context ORM model.

    session_id is indexed but carries no foreign key: existing databases
    hold rows for sessions that were swept, so a constraint is not
    reintroduced. Every query filters by session_id.

    Attributes:
        id: Autoincrement primary key
        session_id: Session the reference was added in
        title: Short title, also used for relevance matching
        content: Reference text
        timestamp: Creation time (epoch ms)
        is_active: Inactive references are never injected
    """

    __tablename__ = "reference_contexts"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    session_id: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    content: Mapped[str] = mapped_column(Text, nullable=False)
    timestamp: Mapped[int] = mapped_column(BigInteger, nullable=False, default=now_ms)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)

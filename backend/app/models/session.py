"""Server-side login sessions (cookie carries only the random `sid`)."""
from datetime import datetime
from sqlalchemy import Column, String, DateTime, Integer, ForeignKey, Index

from app.database import Base
from app.database_types import JSONDocument


class UserSession(Base):
    __tablename__ = "sessions"
    __table_args__ = (
        Index("IDX_session_expire", "expire"),
    )

    sid = Column(String(64), primary_key=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)

    # Extra per-session data (login method, OAuth provider)
    data = Column(JSONDocument, nullable=False, default=dict)

    expire = Column(DateTime, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    def is_expired(self) -> bool:
        return datetime.utcnow() >= self.expire

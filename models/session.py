import uuid
from sqlalchemy import Column, String, DateTime, ForeignKey, Index
from models.base import Base, TimestampMixin

# secrets.token_hex(32)
TOKEN_LENGTH = 64


class Session(Base, TimestampMixin):
    """Server-side login session; the token travels in the session cookie."""
    __tablename__ = "sessions"

    id = Column(String(64), primary_key=True, default=lambda: str(uuid.uuid4()))
    user_id = Column(String(64), ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    token = Column(String(TOKEN_LENGTH), unique=True, nullable=False, index=True)
    expires_at = Column(DateTime(timezone=True), nullable=False)


Index("idx_sessions_user_id", Session.user_id)

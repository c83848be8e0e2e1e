import uuid
from sqlalchemy import Column, String, Text, DateTime, ForeignKey, Index
from models.base import Base, utcnow


class ActivityLog(Base):
    __tablename__ = "activity_log"

    id = Column(String(64), primary_key=True, default=lambda: str(uuid.uuid4()))
    project_id = Column(String(64), ForeignKey("projects.id", ondelete="CASCADE"), nullable=True)
    user_id = Column(String(64), ForeignKey("users.id"), nullable=True)
    action = Column(String(32), nullable=False)
    details = Column(Text, nullable=False, default="")
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)

Index("idx_activity_log_created_at", ActivityLog.created_at.desc())

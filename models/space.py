import uuid
from sqlalchemy import Column, String, DateTime, ForeignKey
from models.base import Base, utcnow

DEFAULT_ICON = "home"


class Space(Base):
    __tablename__ = "spaces"

    id = Column(String(64), primary_key=True, default=lambda: str(uuid.uuid4()))
    name = Column(String(255), nullable=False)
    icon = Column(String(64), nullable=False, default=DEFAULT_ICON)
    created_by = Column(String(64), ForeignKey("users.id"), nullable=True)
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)

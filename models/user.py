import uuid
from sqlalchemy import Column, String, Boolean, DateTime
from models.base import Base, utcnow

DEFAULT_AVATAR_COLOR = "#C2603A"


class User(Base):
    __tablename__ = "users"

    id = Column(String(64), primary_key=True, default=lambda: str(uuid.uuid4()))
    username = Column(String(30), unique=True, nullable=False, index=True)
    display_name = Column(String(255), nullable=False)
    password_hash = Column(String(255), nullable=False)
    avatar_color = Column(String(16), nullable=False, default=DEFAULT_AVATAR_COLOR)
    is_admin = Column(Boolean, default=False, nullable=False)
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)

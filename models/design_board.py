import uuid
from sqlalchemy import Column, String, Text, DateTime, ForeignKey, Index, CheckConstraint
from models.base import Base, utcnow

ITEM_TYPES = ("link", "photo", "note")


class DesignBoardItem(Base):
    __tablename__ = "design_board_items"
    __table_args__ = (
        CheckConstraint("item_type IN ('link', 'photo', 'note')", name="ck_design_board_items_item_type"),
    )

    id = Column(String(64), primary_key=True, default=lambda: str(uuid.uuid4()))
    project_id = Column(String(64), ForeignKey("projects.id", ondelete="CASCADE"), nullable=False)
    item_type = Column(String(16), nullable=False)
    title = Column(String(255), nullable=False, default="")
    content = Column(Text, nullable=False, default="")
    url = Column(String(2048), nullable=False, default="")
    file_path = Column(String(512), nullable=False, default="")
    added_by = Column(String(64), ForeignKey("users.id"), nullable=True)
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)

Index("idx_design_board_items_project_id", DesignBoardItem.project_id, DesignBoardItem.created_at.desc())


class DesignBoardComment(Base):
    __tablename__ = "design_board_comments"

    id = Column(String(64), primary_key=True, default=lambda: str(uuid.uuid4()))
    board_item_id = Column(String(64), ForeignKey("design_board_items.id", ondelete="CASCADE"), nullable=False)
    user_id = Column(String(64), ForeignKey("users.id"), nullable=False)
    comment_text = Column(Text, nullable=False)
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)

Index("idx_design_board_comments_item_id", DesignBoardComment.board_item_id, DesignBoardComment.created_at)

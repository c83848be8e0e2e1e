import uuid
from sqlalchemy import Column, String, Text, Float, DateTime, ForeignKey, Index, CheckConstraint
from models.base import Base, TimestampMixin, utcnow

PRIORITIES = ("low", "medium", "high", "urgent")
STATUSES = ("not_started", "planning", "in_progress", "almost_done", "complete")
PHOTO_TYPES = ("before", "during", "after", "inspiration", "general")


def _in(column: str, values) -> str:
    return f"{column} IN ({', '.join(repr(v) for v in values)})"


class Project(Base, TimestampMixin):
    __tablename__ = "projects"
    __table_args__ = (
        CheckConstraint(_in("priority", PRIORITIES), name="ck_projects_priority"),
        CheckConstraint(_in("status", STATUSES), name="ck_projects_status"),
        CheckConstraint("estimated_budget >= 0", name="ck_projects_estimated_budget"),
        CheckConstraint("spent_budget >= 0", name="ck_projects_spent_budget"),
    )

    id = Column(String(64), primary_key=True, default=lambda: str(uuid.uuid4()))
    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=False, default="")
    space_id = Column(String(64), ForeignKey("spaces.id", ondelete="SET NULL"), nullable=True)
    priority = Column(String(16), nullable=False, default="medium")
    status = Column(String(16), nullable=False, default="not_started")
    assigned_to = Column(String(64), ForeignKey("users.id", ondelete="SET NULL"), nullable=True)
    estimated_budget = Column(Float, nullable=False, default=0)
    spent_budget = Column(Float, nullable=False, default=0)
    time_estimate = Column(String(64), nullable=False, default="")
    due_date = Column(String(32), nullable=True)
    created_by = Column(String(64), ForeignKey("users.id"), nullable=True)

Index("idx_projects_updated_at", Project.updated_at.desc())
Index("idx_projects_space_id", Project.space_id)


class ProjectTag(Base):
    __tablename__ = "project_tags"

    id = Column(String(64), primary_key=True, default=lambda: str(uuid.uuid4()))
    project_id = Column(String(64), ForeignKey("projects.id", ondelete="CASCADE"), nullable=False)
    tag_name = Column(String(255), nullable=False)

Index("idx_project_tags_project_id", ProjectTag.project_id)


class ProjectPhoto(Base):
    __tablename__ = "project_photos"
    __table_args__ = (
        CheckConstraint(_in("photo_type", PHOTO_TYPES), name="ck_project_photos_photo_type"),
    )

    id = Column(String(64), primary_key=True, default=lambda: str(uuid.uuid4()))
    project_id = Column(String(64), ForeignKey("projects.id", ondelete="CASCADE"), nullable=False)
    file_path = Column(String(512), nullable=False)
    caption = Column(Text, nullable=False, default="")
    photo_type = Column(String(16), nullable=False, default="general")
    uploaded_by = Column(String(64), ForeignKey("users.id"), nullable=True)
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)

Index("idx_project_photos_project_id", ProjectPhoto.project_id, ProjectPhoto.created_at.desc())


class ProjectComment(Base):
    __tablename__ = "project_comments"

    id = Column(String(64), primary_key=True, default=lambda: str(uuid.uuid4()))
    project_id = Column(String(64), ForeignKey("projects.id", ondelete="CASCADE"), nullable=False)
    user_id = Column(String(64), ForeignKey("users.id"), nullable=False)
    comment_text = Column(Text, nullable=False)
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)

Index("idx_project_comments_project_id", ProjectComment.project_id, ProjectComment.created_at)

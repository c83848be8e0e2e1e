from datetime import datetime
from pydantic import Field, field_validator

from models.project import PRIORITIES, STATUSES
from schemas.common import CamelModel, public_upload_path


def _choice(value, allowed, label):
    # Empty values mean "not supplied"
    if value in (None, ""):
        return None
    if value not in allowed:
        raise ValueError(f"{label} must be one of: {', '.join(allowed)}")
    return value


class ProjectFields(CamelModel):
    title: str | None = None
    description: str | None = None
    space_id: str | None = None
    priority: str | None = None
    status: str | None = None
    assigned_to: str | None = None
    estimated_budget: float | None = Field(default=None, ge=0)
    spent_budget: float | None = Field(default=None, ge=0)
    time_estimate: str | None = None
    due_date: str | None = None
    tags: list[str] | None = None

    @field_validator("priority")
    @classmethod
    def _check_priority(cls, v):
        return _choice(v, PRIORITIES, "priority")

    @field_validator("status")
    @classmethod
    def _check_status(cls, v):
        return _choice(v, STATUSES, "status")

    @field_validator("tags")
    @classmethod
    def _clean_tags(cls, v):
        if v is None:
            return None
        return [t.strip() for t in v if t and t.strip()]


class ProjectCreate(ProjectFields):
    """Client payload for creating a project. Creator is inferred from auth."""
    pass


class ProjectUpdate(ProjectFields):
    """Partial update; only keys present in the payload are considered."""
    pass


class PhotoResponse(CamelModel):
    id: str
    file_path: str
    caption: str = ""
    photo_type: str
    uploader_name: str | None = None
    created_at: datetime | None = None

    @field_validator("file_path")
    @classmethod
    def _public_path(cls, v):
        return public_upload_path(v)


class CommentCreate(CamelModel):
    text: str | None = None


class CommentResponse(CamelModel):
    id: str
    user_id: str
    user_name: str | None = None
    avatar_color: str | None = None
    text: str
    created_at: datetime | None = None


class ProjectBase(CamelModel):
    id: str
    title: str
    description: str = ""
    space_id: str | None = None
    space_name: str | None = None
    space_icon: str | None = None
    priority: str
    status: str
    assigned_to: str | None = None
    assignee_name: str | None = None
    assignee_color: str | None = None
    estimated_budget: float = 0
    spent_budget: float = 0
    time_estimate: str = ""
    due_date: str | None = None
    created_by: str | None = None
    creator_name: str | None = None
    creator_color: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


class ProjectSummary(ProjectBase):
    photo_count: int = 0
    board_item_count: int = 0


class ProjectDetail(ProjectBase):
    tags: list[str] = []
    photos: list[PhotoResponse] = []
    comments: list[CommentResponse] = []


class ActivityResponse(CamelModel):
    id: str
    project_id: str | None = None
    project_title: str | None = None
    user_id: str | None = None
    user_name: str | None = None
    avatar_color: str | None = None
    action: str
    details: str = ""
    created_at: datetime | None = None

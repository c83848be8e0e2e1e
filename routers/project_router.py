import logging

from fastapi import APIRouter, Depends, File, Form, UploadFile
from sqlalchemy.orm import Session
from core.auth import get_current_user
from core.database import get_db
from core.errors import NotFoundError, ValidationError
from core.config import settings
from core.storage import save_image_uploads
from crud.activity_crud import list_recent_activity
from crud.project_crud import (
    list_projects, get_project, get_project_row, get_project_tags, list_project_photos,
    list_project_comments, create_project, update_project, delete_project,
    add_photos, get_photo, delete_photo, add_comment,
)
from crud.space_crud import get_space
from crud.user_crud import get_user
from models.project import PHOTO_TYPES, PRIORITIES, STATUSES
from schemas.common import OkResponse
from schemas.project_schema import (
    ActivityResponse, CommentCreate, CommentResponse, PhotoResponse,
    ProjectCreate, ProjectDetail, ProjectFields, ProjectSummary, ProjectUpdate,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/projects", tags=["Projects"], dependencies=[Depends(get_current_user)])


def _require_project(db: Session, project_id: str):
    proj = get_project(db, project_id)
    if not proj:
        raise NotFoundError("Project not found")
    return proj


def _check_references(db: Session, payload: ProjectFields):
    if payload.space_id and not get_space(db, payload.space_id):
        raise ValidationError("Space not found")
    if payload.assigned_to and not get_user(db, payload.assigned_to):
        raise ValidationError("Assigned user not found")


def project_detail(db: Session, project_id: str) -> ProjectDetail:
    row = get_project_row(db, project_id)
    if not row:
        raise NotFoundError("Project not found")
    return ProjectDetail(
        **row._mapping,
        tags=get_project_tags(db, project_id),
        photos=[PhotoResponse.model_validate(p) for p in list_project_photos(db, project_id)],
        comments=[CommentResponse.model_validate(c) for c in list_project_comments(db, project_id)],
    )


@router.get("", response_model=list[ProjectSummary])
def list_all(
    space_id: str | None = None,
    status: str | None = None,
    priority: str | None = None,
    assigned_to: str | None = None,
    db: Session = Depends(get_db),
):
    if status and status not in STATUSES:
        raise ValidationError(f"status must be one of: {', '.join(STATUSES)}")
    if priority and priority not in PRIORITIES:
        raise ValidationError(f"priority must be one of: {', '.join(PRIORITIES)}")
    return list_projects(db, space_id=space_id, status=status, priority=priority, assigned_to=assigned_to)


@router.get("/activity/recent", response_model=list[ActivityResponse])
def recent_activity(db: Session = Depends(get_db)):
    return list_recent_activity(db)


@router.get("/{project_id}", response_model=ProjectDetail)
def read_one(project_id: str, db: Session = Depends(get_db)):
    return project_detail(db, project_id)


@router.post("", response_model=ProjectDetail, status_code=201)
def create(payload: ProjectCreate, db: Session = Depends(get_db), current_user=Depends(get_current_user)):
    if not payload.title or not payload.title.strip():
        raise ValidationError("Title is required")
    _check_references(db, payload)
    proj = create_project(db, payload, user_id=current_user.id)
    return project_detail(db, proj.id)


@router.put("/{project_id}", response_model=ProjectDetail)
def update(
    project_id: str,
    payload: ProjectUpdate,
    db: Session = Depends(get_db),
    current_user=Depends(get_current_user),
):
    proj = _require_project(db, project_id)
    _check_references(db, payload)
    update_project(db, proj, payload, user_id=current_user.id)
    return project_detail(db, project_id)


@router.delete("/{project_id}", response_model=OkResponse)
def delete(project_id: str, db: Session = Depends(get_db)):
    ok = delete_project(db, project_id)
    if not ok:
        raise NotFoundError("Project not found")
    return OkResponse()


@router.post("/{project_id}/photos", response_model=list[PhotoResponse], status_code=201)
def upload_photos(
    project_id: str,
    photos: list[UploadFile] = File(default=[]),
    photo_type: str | None = Form(default=None, alias="photoType"),
    caption: str | None = Form(default=None),
    db: Session = Depends(get_db),
    current_user=Depends(get_current_user),
):
    _require_project(db, project_id)
    if not photos:
        raise ValidationError("No files uploaded")
    if len(photos) > settings.MAX_FILES_PER_UPLOAD:
        raise ValidationError(f"At most {settings.MAX_FILES_PER_UPLOAD} files per upload")
    photo_type = photo_type or "general"
    if photo_type not in PHOTO_TYPES:
        raise ValidationError(f"photoType must be one of: {', '.join(PHOTO_TYPES)}")

    stored = save_image_uploads(photos)
    # Files are on disk before the rows exist; a failure below leaves them orphaned
    created = add_photos(
        db,
        project_id,
        stored,
        user_id=current_user.id,
        photo_type=photo_type,
        caption=caption or "",
    )
    logger.info("Uploaded %d photo(s) to project %s", len(created), project_id)
    return [
        PhotoResponse(
            id=p.id,
            file_path=p.file_path,
            caption=p.caption,
            photo_type=p.photo_type,
            uploader_name=current_user.display_name,
            created_at=p.created_at,
        )
        for p in created
    ]


@router.delete("/{project_id}/photos/{photo_id}", response_model=OkResponse)
def remove_photo(project_id: str, photo_id: str, db: Session = Depends(get_db)):
    photo = get_photo(db, project_id, photo_id)
    if not photo:
        raise NotFoundError("Photo not found")
    delete_photo(db, photo)
    return OkResponse()


@router.post("/{project_id}/comments", response_model=CommentResponse, status_code=201)
def comment(
    project_id: str,
    payload: CommentCreate,
    db: Session = Depends(get_db),
    current_user=Depends(get_current_user),
):
    if not payload.text or not payload.text.strip():
        raise ValidationError("Comment text is required")
    _require_project(db, project_id)
    c = add_comment(db, project_id, current_user.id, payload.text)
    return CommentResponse(
        id=c.id,
        user_id=current_user.id,
        user_name=current_user.display_name,
        avatar_color=current_user.avatar_color,
        text=c.comment_text,
        created_at=c.created_at,
    )

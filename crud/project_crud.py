import logging
from sqlalchemy.orm import Session, aliased
from sqlalchemy import desc, func, select
from models.base import utcnow
from models.design_board import DesignBoardItem
from models.project import Project, ProjectComment, ProjectPhoto, ProjectTag
from models.space import Space
from models.user import User
from schemas.project_schema import ProjectCreate, ProjectUpdate
from crud.activity_crud import log_activity
from core.storage import remove_upload

logger = logging.getLogger(__name__)

Creator = aliased(User)
Assignee = aliased(User)

# Explicitly nullable on update: present-with-null clears, absent keeps
NULLABLE_REFS = ("space_id", "assigned_to", "due_date")
# Falsy values keep the current value
KEEP_IF_EMPTY = ("title", "priority", "status")
# Only None keeps the current value
KEEP_IF_NONE = ("description", "estimated_budget", "spent_budget", "time_estimate")


def _project_query(db: Session, with_counts: bool = False):
    columns = [
        Project.id,
        Project.title,
        Project.description,
        Project.space_id,
        Space.name.label("space_name"),
        Space.icon.label("space_icon"),
        Project.priority,
        Project.status,
        Project.assigned_to,
        Assignee.display_name.label("assignee_name"),
        Assignee.avatar_color.label("assignee_color"),
        Project.estimated_budget,
        Project.spent_budget,
        Project.time_estimate,
        Project.due_date,
        Project.created_by,
        Creator.display_name.label("creator_name"),
        Creator.avatar_color.label("creator_color"),
        Project.created_at,
        Project.updated_at,
    ]
    if with_counts:
        columns.append(
            select(func.count(ProjectPhoto.id))
            .where(ProjectPhoto.project_id == Project.id)
            .scalar_subquery()
            .label("photo_count")
        )
        columns.append(
            select(func.count(DesignBoardItem.id))
            .where(DesignBoardItem.project_id == Project.id)
            .scalar_subquery()
            .label("board_item_count")
        )
    return (
        db.query(*columns)
        .outerjoin(Space, Project.space_id == Space.id)
        .outerjoin(Creator, Project.created_by == Creator.id)
        .outerjoin(Assignee, Project.assigned_to == Assignee.id)
    )


def get_project(db: Session, project_id: str):
    return db.query(Project).filter(Project.id == project_id).first()


def get_project_row(db: Session, project_id: str):
    return _project_query(db).filter(Project.id == project_id).first()


def list_projects(
    db: Session,
    space_id: str | None = None,
    status: str | None = None,
    priority: str | None = None,
    assigned_to: str | None = None,
):
    q = _project_query(db, with_counts=True)
    if space_id:
        q = q.filter(Project.space_id == space_id)
    if status:
        q = q.filter(Project.status == status)
    if priority:
        q = q.filter(Project.priority == priority)
    if assigned_to:
        q = q.filter(Project.assigned_to == assigned_to)
    return q.order_by(desc(Project.updated_at)).all()


def get_project_tags(db: Session, project_id: str) -> list[str]:
    rows = db.query(ProjectTag.tag_name).filter(ProjectTag.project_id == project_id).all()
    return [r.tag_name for r in rows]


def list_project_photos(db: Session, project_id: str):
    return (
        db.query(
            ProjectPhoto.id,
            ProjectPhoto.file_path,
            ProjectPhoto.caption,
            ProjectPhoto.photo_type,
            User.display_name.label("uploader_name"),
            ProjectPhoto.created_at,
        )
        .outerjoin(User, ProjectPhoto.uploaded_by == User.id)
        .filter(ProjectPhoto.project_id == project_id)
        .order_by(desc(ProjectPhoto.created_at))
        .all()
    )


def list_project_comments(db: Session, project_id: str):
    return (
        db.query(
            ProjectComment.id,
            ProjectComment.user_id,
            User.display_name.label("user_name"),
            User.avatar_color,
            ProjectComment.comment_text.label("text"),
            ProjectComment.created_at,
        )
        .join(User, ProjectComment.user_id == User.id)
        .filter(ProjectComment.project_id == project_id)
        .order_by(ProjectComment.created_at)
        .all()
    )


def _replace_tags(db: Session, project_id: str, tags: list[str]):
    db.query(ProjectTag).filter(ProjectTag.project_id == project_id).delete(synchronize_session=False)
    for tag in tags:
        db.add(ProjectTag(project_id=project_id, tag_name=tag))


def touch_project(db: Session, project_id: str):
    db.query(Project).filter(Project.id == project_id).update(
        {Project.updated_at: utcnow()}, synchronize_session=False
    )


def create_project(db: Session, payload: ProjectCreate, user_id: str):
    proj = Project(
        title=payload.title,
        description=payload.description or "",
        space_id=payload.space_id or None,
        priority=payload.priority or "medium",
        status=payload.status or "not_started",
        assigned_to=payload.assigned_to or None,
        estimated_budget=payload.estimated_budget or 0,
        spent_budget=payload.spent_budget or 0,
        time_estimate=payload.time_estimate or "",
        due_date=payload.due_date or None,
        created_by=user_id,
    )
    db.add(proj)
    db.flush()
    for tag in payload.tags or []:
        db.add(ProjectTag(project_id=proj.id, tag_name=tag))
    log_activity(db, proj.id, user_id, "created", f'Created project "{proj.title}"')
    db.commit()
    db.refresh(proj)
    logger.info("Project %s created by %s", proj.id, user_id)
    return proj


def _describe_changes(proj: Project, data: dict) -> list[str]:
    changes = []
    if data.get("status") and data["status"] != proj.status:
        changes.append(f'status to "{data["status"]}"')
    if data.get("priority") and data["priority"] != proj.priority:
        changes.append(f'priority to "{data["priority"]}"')
    if "assigned_to" in data and (data["assigned_to"] or None) != proj.assigned_to:
        changes.append("assignment")
    return changes


def update_project(db: Session, proj: Project, payload: ProjectUpdate, user_id: str):
    """Apply a partial update and log status/priority/assignment changes.

    Only keys the client actually sent are considered. Most columns keep their
    value when the key is null; ``space_id``, ``assigned_to`` and ``due_date``
    are cleared by null. A supplied ``tags`` list replaces the whole tag set.
    """
    data = payload.model_dump(exclude_unset=True)
    changes = _describe_changes(proj, data)

    for k in KEEP_IF_EMPTY:
        if data.get(k):
            setattr(proj, k, data[k])
    for k in KEEP_IF_NONE:
        if data.get(k) is not None:
            setattr(proj, k, data[k])
    for k in NULLABLE_REFS:
        if k in data:
            setattr(proj, k, data[k] or None)

    if data.get("tags") is not None:
        _replace_tags(db, proj.id, data["tags"])

    proj.updated_at = utcnow()
    if changes:
        log_activity(db, proj.id, user_id, "updated", f"Changed {', '.join(changes)}")
    db.commit()
    db.refresh(proj)
    return proj


def list_project_files(db: Session, project_id: str) -> list[str]:
    photos = db.query(ProjectPhoto.file_path).filter(ProjectPhoto.project_id == project_id).all()
    board = (
        db.query(DesignBoardItem.file_path)
        .filter(
            DesignBoardItem.project_id == project_id,
            DesignBoardItem.item_type == "photo",
            DesignBoardItem.file_path != "",
        )
        .all()
    )
    return [r.file_path for r in photos] + [r.file_path for r in board]


def delete_project(db: Session, project_id: str) -> bool:
    proj = get_project(db, project_id)
    if not proj:
        return False
    # Stored files go first; tags, photos, comments and board items cascade in the store
    for name in list_project_files(db, project_id):
        remove_upload(name)
    db.delete(proj)
    db.commit()
    logger.info("Project %s deleted", project_id)
    return True


def add_photos(
    db: Session,
    project_id: str,
    stored_names: list[str],
    user_id: str,
    photo_type: str = "general",
    caption: str = "",
):
    photos = [
        ProjectPhoto(
            project_id=project_id,
            file_path=name,
            caption=caption,
            photo_type=photo_type,
            uploaded_by=user_id,
        )
        for name in stored_names
    ]
    db.add_all(photos)
    touch_project(db, project_id)
    db.commit()
    for p in photos:
        db.refresh(p)
    return photos


def get_photo(db: Session, project_id: str, photo_id: str):
    return (
        db.query(ProjectPhoto)
        .filter(ProjectPhoto.id == photo_id, ProjectPhoto.project_id == project_id)
        .first()
    )


def delete_photo(db: Session, photo: ProjectPhoto) -> None:
    remove_upload(photo.file_path)
    db.delete(photo)
    touch_project(db, photo.project_id)
    db.commit()


def add_comment(db: Session, project_id: str, user_id: str, text: str):
    comment = ProjectComment(project_id=project_id, user_id=user_id, comment_text=text)
    db.add(comment)
    touch_project(db, project_id)
    db.commit()
    db.refresh(comment)
    return comment

from fastapi import APIRouter, Depends, File, Form, UploadFile
from sqlalchemy.orm import Session
from core.auth import get_current_user
from core.database import get_db
from core.errors import NotFoundError, ValidationError
from core.storage import save_image_upload
from crud.design_board_crud import (
    list_items, comments_by_item, get_item, get_item_row, add_item, delete_item, add_comment,
)
from crud.project_crud import get_project
from schemas.common import OkResponse
from schemas.design_board_schema import BoardItem, LinkCreate, NoteCreate, board_item_from_row
from schemas.project_schema import CommentCreate, CommentResponse


router = APIRouter(
    prefix="/api/projects/{project_id}/design-board",
    tags=["Design Board"],
    dependencies=[Depends(get_current_user)],
)


def _require_project(db: Session, project_id: str):
    if not get_project(db, project_id):
        raise NotFoundError("Project not found")


def _item_response(db: Session, project_id: str, item_id: str):
    row = get_item_row(db, project_id, item_id)
    return board_item_from_row(row, comments_by_item(db, [item_id]).get(item_id, []))


@router.get("", response_model=list[BoardItem])
def list_all(project_id: str, db: Session = Depends(get_db)):
    _require_project(db, project_id)
    rows = list_items(db, project_id)
    comments = comments_by_item(db, [r.id for r in rows])
    return [board_item_from_row(r, comments.get(r.id, [])) for r in rows]


@router.post("/link", response_model=BoardItem, status_code=201)
def add_link(
    project_id: str,
    payload: LinkCreate,
    db: Session = Depends(get_db),
    current_user=Depends(get_current_user),
):
    if not payload.url or not payload.url.strip():
        raise ValidationError("URL is required")
    _require_project(db, project_id)
    item = add_item(
        db, project_id, "link", current_user.id,
        title=payload.title, content=payload.content, url=payload.url.strip(),
    )
    return _item_response(db, project_id, item.id)


@router.post("/note", response_model=BoardItem, status_code=201)
def add_note(
    project_id: str,
    payload: NoteCreate,
    db: Session = Depends(get_db),
    current_user=Depends(get_current_user),
):
    if not payload.content or not payload.content.strip():
        raise ValidationError("Note content is required")
    _require_project(db, project_id)
    item = add_item(db, project_id, "note", current_user.id, title=payload.title, content=payload.content)
    return _item_response(db, project_id, item.id)


@router.post("/photo", response_model=BoardItem, status_code=201)
def add_photo(
    project_id: str,
    photo: UploadFile | None = File(default=None),
    title: str | None = Form(default=None),
    content: str | None = Form(default=None),
    db: Session = Depends(get_db),
    current_user=Depends(get_current_user),
):
    _require_project(db, project_id)
    if photo is None or not photo.filename:
        raise ValidationError("No file uploaded")
    stored = save_image_upload(photo, prefix="board_")
    item = add_item(
        db, project_id, "photo", current_user.id,
        title=title, content=content, file_path=stored,
    )
    return _item_response(db, project_id, item.id)


@router.delete("/{item_id}", response_model=OkResponse)
def remove(project_id: str, item_id: str, db: Session = Depends(get_db)):
    item = get_item(db, project_id, item_id)
    if not item:
        raise NotFoundError("Item not found")
    delete_item(db, item)
    return OkResponse()


@router.post("/{item_id}/comments", response_model=CommentResponse, status_code=201)
def comment(
    project_id: str,
    item_id: str,
    payload: CommentCreate,
    db: Session = Depends(get_db),
    current_user=Depends(get_current_user),
):
    if not payload.text or not payload.text.strip():
        raise ValidationError("Comment text is required")
    item = get_item(db, project_id, item_id)
    if not item:
        raise NotFoundError("Item not found")
    c = add_comment(db, item, current_user.id, payload.text)
    return CommentResponse(
        id=c.id,
        user_id=current_user.id,
        user_name=current_user.display_name,
        avatar_color=current_user.avatar_color,
        text=c.comment_text,
        created_at=c.created_at,
    )

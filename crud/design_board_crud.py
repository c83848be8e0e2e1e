from collections import defaultdict
from sqlalchemy.orm import Session
from sqlalchemy import desc
from models.design_board import DesignBoardItem, DesignBoardComment
from models.user import User
from crud.project_crud import touch_project
from core.storage import remove_upload


def _item_query(db: Session):
    return (
        db.query(
            DesignBoardItem.id,
            DesignBoardItem.project_id,
            DesignBoardItem.item_type,
            DesignBoardItem.title,
            DesignBoardItem.content,
            DesignBoardItem.url,
            DesignBoardItem.file_path,
            DesignBoardItem.added_by,
            User.display_name.label("added_by_name"),
            User.avatar_color,
            DesignBoardItem.created_at,
        )
        .outerjoin(User, DesignBoardItem.added_by == User.id)
    )


def list_items(db: Session, project_id: str):
    return (
        _item_query(db)
        .filter(DesignBoardItem.project_id == project_id)
        .order_by(desc(DesignBoardItem.created_at))
        .all()
    )


def comments_by_item(db: Session, item_ids: list[str]) -> dict:
    """Comments for the given items, oldest first, keyed by item id."""
    grouped = defaultdict(list)
    if not item_ids:
        return grouped
    rows = (
        db.query(
            DesignBoardComment.id,
            DesignBoardComment.board_item_id,
            DesignBoardComment.user_id,
            User.display_name.label("user_name"),
            User.avatar_color,
            DesignBoardComment.comment_text.label("text"),
            DesignBoardComment.created_at,
        )
        .join(User, DesignBoardComment.user_id == User.id)
        .filter(DesignBoardComment.board_item_id.in_(item_ids))
        .order_by(DesignBoardComment.created_at)
        .all()
    )
    for r in rows:
        grouped[r.board_item_id].append(r)
    return grouped


def get_item(db: Session, project_id: str, item_id: str):
    return (
        db.query(DesignBoardItem)
        .filter(DesignBoardItem.id == item_id, DesignBoardItem.project_id == project_id)
        .first()
    )


def get_item_row(db: Session, project_id: str, item_id: str):
    return (
        _item_query(db)
        .filter(DesignBoardItem.id == item_id, DesignBoardItem.project_id == project_id)
        .first()
    )


def add_item(
    db: Session,
    project_id: str,
    item_type: str,
    user_id: str,
    title: str = "",
    content: str = "",
    url: str = "",
    file_path: str = "",
):
    item = DesignBoardItem(
        project_id=project_id,
        item_type=item_type,
        title=title or "",
        content=content or "",
        url=url or "",
        file_path=file_path or "",
        added_by=user_id,
    )
    db.add(item)
    touch_project(db, project_id)
    db.commit()
    db.refresh(item)
    return item


def delete_item(db: Session, item: DesignBoardItem) -> None:
    if item.file_path:
        remove_upload(item.file_path)
    db.delete(item)
    touch_project(db, item.project_id)
    db.commit()


def add_comment(db: Session, item: DesignBoardItem, user_id: str, text: str):
    comment = DesignBoardComment(board_item_id=item.id, user_id=user_id, comment_text=text)
    db.add(comment)
    touch_project(db, item.project_id)
    db.commit()
    db.refresh(comment)
    return comment

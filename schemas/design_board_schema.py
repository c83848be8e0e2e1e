from datetime import datetime
from typing import Annotated, Literal, Union

from pydantic import Field, field_validator

from schemas.common import CamelModel, public_upload_path
from schemas.project_schema import CommentResponse


class LinkCreate(CamelModel):
    url: str | None = None
    title: str | None = None
    content: str | None = None


class NoteCreate(CamelModel):
    title: str | None = None
    content: str | None = None


class BoardItemBase(CamelModel):
    id: str
    project_id: str
    title: str = ""
    content: str = ""
    added_by: str | None = None
    added_by_name: str | None = None
    avatar_color: str | None = None
    created_at: datetime | None = None
    comments: list[CommentResponse] = []


class LinkItem(BoardItemBase):
    item_type: Literal["link"] = "link"
    url: str


class NoteItem(BoardItemBase):
    item_type: Literal["note"] = "note"


class PhotoItem(BoardItemBase):
    item_type: Literal["photo"] = "photo"
    file_path: str

    @field_validator("file_path")
    @classmethod
    def _public_path(cls, v):
        return public_upload_path(v)


BoardItem = Annotated[Union[LinkItem, NoteItem, PhotoItem], Field(discriminator="item_type")]

_VARIANTS = {
    "link": LinkItem,
    "note": NoteItem,
    "photo": PhotoItem,
}


def board_item_from_row(row, comments=()) -> LinkItem | NoteItem | PhotoItem:
    """Build the variant model matching ``row.item_type``.

    Only the fields a variant owns are copied; unknown item types are rejected.
    """
    try:
        model = _VARIANTS[row.item_type]
    except KeyError:
        raise ValueError(f"Unknown design board item type: {row.item_type!r}")
    data = {
        "id": row.id,
        "project_id": row.project_id,
        "title": row.title or "",
        "content": row.content or "",
        "added_by": row.added_by,
        "added_by_name": row.added_by_name,
        "avatar_color": row.avatar_color,
        "created_at": row.created_at,
        "comments": [CommentResponse.model_validate(c) for c in comments],
    }
    if model is LinkItem:
        data["url"] = row.url
    elif model is PhotoItem:
        data["file_path"] = row.file_path
    return model(**data)

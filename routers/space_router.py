from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from core.auth import get_current_user
from core.database import get_db
from core.errors import NotFoundError, ValidationError
from crud.space_crud import list_spaces, create_space, update_space, delete_space
from schemas.common import OkResponse
from schemas.space_schema import SpaceCreate, SpaceResponse, SpaceUpdate


router = APIRouter(prefix="/api/spaces", tags=["Spaces"], dependencies=[Depends(get_current_user)])


@router.get("", response_model=list[SpaceResponse])
def list_all(db: Session = Depends(get_db)):
    return list_spaces(db)


@router.post("", response_model=SpaceResponse, status_code=201)
def create(payload: SpaceCreate, db: Session = Depends(get_db), current_user=Depends(get_current_user)):
    if not payload.name or not payload.name.strip():
        raise ValidationError("Space name is required")
    return create_space(db, payload.name.strip(), payload.icon, user_id=current_user.id)


@router.put("/{space_id}", response_model=SpaceResponse)
def update(space_id: str, payload: SpaceUpdate, db: Session = Depends(get_db)):
    space = update_space(db, space_id, name=payload.name, icon=payload.icon)
    if not space:
        raise NotFoundError("Space not found")
    return space


@router.delete("/{space_id}", response_model=OkResponse)
def delete(space_id: str, db: Session = Depends(get_db)):
    delete_space(db, space_id)
    return OkResponse()

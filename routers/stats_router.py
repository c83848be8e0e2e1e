from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from core.auth import get_current_user
from core.database import get_db
from crud.stats_crud import project_stats
from schemas.stats_schema import StatsResponse


router = APIRouter(prefix="/api/stats", tags=["Stats"], dependencies=[Depends(get_current_user)])


@router.get("", response_model=StatsResponse)
def read_stats(db: Session = Depends(get_db)):
    return StatsResponse.model_validate(project_stats(db))

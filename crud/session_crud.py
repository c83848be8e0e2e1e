from datetime import datetime, timezone
from sqlalchemy.orm import Session
from models.session import Session as SessionModel
from schemas.session_schema import SessionCreate


def get_session_by_token(db: Session, token: str):
    return db.query(SessionModel).filter(SessionModel.token == token).first()


def create_session(db: Session, payload: SessionCreate):
    s = SessionModel(
        user_id=payload.user_id,
        token=payload.token,
        expires_at=payload.expires_at,
    )
    db.add(s)
    db.commit()
    db.refresh(s)
    return s


def delete_session_by_token(db: Session, token: str) -> bool:
    s = get_session_by_token(db, token)
    if not s:
        return False
    db.delete(s)
    db.commit()
    return True


def purge_expired_sessions(db: Session, user_id: str) -> int:
    now = datetime.now(timezone.utc)
    n = (
        db.query(SessionModel)
        .filter(SessionModel.user_id == user_id, SessionModel.expires_at < now)
        .delete(synchronize_session=False)
    )
    db.commit()
    return n

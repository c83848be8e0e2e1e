from datetime import datetime, timedelta, timezone
from typing import Optional

from fastapi import Depends, Header, Request, Response
from sqlalchemy.orm import Session

from core.config import settings
from core.database import get_db
from core.errors import AuthError
from core.security import new_session_token
from crud.session_crud import create_session, get_session_by_token
from crud.user_crud import get_user
from schemas.session_schema import SessionCreate


def _extract_bearer_token(authorization: Optional[str]) -> Optional[str]:
    if not authorization:
        return None
    parts = authorization.split()
    if len(parts) == 2 and parts[0].lower() == "bearer":
        return parts[1]
    return None


def session_token(request: Request, authorization: Optional[str] = Header(None)) -> Optional[str]:
    """Session token from the cookie, falling back to a bearer header."""
    return request.cookies.get(settings.SESSION_COOKIE_NAME) or _extract_bearer_token(authorization)


def get_optional_user(
    token: Optional[str] = Depends(session_token),
    db: Session = Depends(get_db),
):
    if not token:
        return None

    s = get_session_by_token(db, token)
    if not s or s.expires_at is None:
        return None

    # SQLite hands back naive datetimes; everything is stored as UTC
    exp = s.expires_at
    if exp.tzinfo is None:
        exp = exp.replace(tzinfo=timezone.utc)
    if exp < datetime.now(timezone.utc):
        return None

    return get_user(db, s.user_id)


def get_current_user(user=Depends(get_optional_user)):
    if user is None:
        raise AuthError("Authentication required")
    return user


def start_session(db: Session, response: Response, user) -> str:
    """Persist a new login session for ``user`` and set the session cookie."""
    token = new_session_token()
    expires_at = datetime.now(timezone.utc) + timedelta(days=settings.SESSION_DAYS)

    create_session(
        db,
        payload=SessionCreate(
            user_id=user.id,
            token=token,
            expires_at=expires_at,
        ),
    )
    response.set_cookie(
        key=settings.SESSION_COOKIE_NAME,
        value=token,
        max_age=settings.SESSION_DAYS * 24 * 60 * 60,
        httponly=True,
        secure=settings.COOKIE_SECURE,
        samesite="lax",
    )
    return token

import logging

from fastapi import APIRouter, Depends, Response
from sqlalchemy.orm import Session

from core.auth import get_current_user, get_optional_user, session_token, start_session
from core.config import settings
from core.database import get_db
from core.errors import AuthError, ConflictError, NotFoundError, PermissionDeniedError, ValidationError
from core.rate_limit import auth_limiter
from core.security import verify_password
from crud.session_crud import delete_session_by_token, purge_expired_sessions
from crud.user_crud import count_users, create_user, get_user, get_user_by_username, list_users, update_user
from schemas.auth_schema import LoginRequest, RegisterRequest, SetupStatusResponse
from schemas.common import OkResponse
from schemas.user_schema import UserResponse, UserUpdate

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/auth", tags=["Authentication"])

MIN_USERNAME = 3
MAX_USERNAME = 30
MIN_PASSWORD = 4


@router.get("/setup-status", response_model=SetupStatusResponse)
def setup_status(db: Session = Depends(get_db)):
    return SetupStatusResponse(needs_setup=count_users(db) == 0)


@router.post(
    "/register",
    response_model=UserResponse,
    status_code=201,
    dependencies=[Depends(auth_limiter)],
)
def register(
    body: RegisterRequest,
    response: Response,
    db: Session = Depends(get_db),
    current_user=Depends(get_optional_user),
):
    """
    Create an account. The very first account becomes admin and is signed in;
    every later account must be created from an admin session.
    """
    if not body.username or not body.password or not body.display_name:
        raise ValidationError("Username, password, and display name are required")
    if not MIN_USERNAME <= len(body.username) <= MAX_USERNAME:
        raise ValidationError(f"Username must be {MIN_USERNAME}-{MAX_USERNAME} characters")
    if len(body.password) < MIN_PASSWORD:
        raise ValidationError(f"Password must be at least {MIN_PASSWORD} characters")

    if get_user_by_username(db, body.username):
        raise ConflictError("Username already taken")

    is_first_user = count_users(db) == 0
    if not is_first_user:
        if current_user is None:
            raise AuthError("Only an admin can create new accounts")
        if not current_user.is_admin:
            raise PermissionDeniedError("Only an admin can create new accounts")

    user = create_user(db, body.username, body.password, body.display_name, is_admin=is_first_user)
    logger.info("Registered user %s (admin=%s)", user.username, user.is_admin)

    if is_first_user:
        start_session(db, response, user)
    return user


@router.post("/login", response_model=UserResponse, dependencies=[Depends(auth_limiter)])
def login(body: LoginRequest, response: Response, db: Session = Depends(get_db)):
    if not body.username or not body.password:
        raise ValidationError("Username and password are required")

    user = get_user_by_username(db, body.username)
    # Same error for unknown user and bad password
    if not user or not verify_password(body.password, user.password_hash):
        logger.info("Failed login attempt")
        raise AuthError("Invalid username or password")

    purge_expired_sessions(db, user.id)
    start_session(db, response, user)
    return user


@router.post("/logout", response_model=OkResponse)
def logout(response: Response, token=Depends(session_token), db: Session = Depends(get_db)):
    if token:
        delete_session_by_token(db, token)
    response.delete_cookie(settings.SESSION_COOKIE_NAME)
    return OkResponse()


@router.get("/me", response_model=UserResponse)
def get_me(current_user=Depends(get_current_user)):
    return current_user


@router.get("/users", response_model=list[UserResponse])
def list_all(db: Session = Depends(get_db), current_user=Depends(get_current_user)):
    return list_users(db)


@router.put("/users/{user_id}", response_model=UserResponse)
def update(
    user_id: str,
    payload: UserUpdate,
    db: Session = Depends(get_db),
    current_user=Depends(get_current_user),
):
    is_self = user_id == current_user.id
    if not is_self and not current_user.is_admin:
        raise PermissionDeniedError("Cannot update other users")

    user = get_user(db, user_id)
    if not user:
        raise NotFoundError("User not found")

    if payload.new_password:
        if is_self:
            if not payload.current_password:
                raise ValidationError("Current password required")
            if not verify_password(payload.current_password, user.password_hash):
                raise ValidationError("Current password is incorrect")
        if len(payload.new_password) < MIN_PASSWORD:
            raise ValidationError(f"Password must be at least {MIN_PASSWORD} characters")

    return update_user(
        db,
        user,
        display_name=payload.display_name,
        avatar_color=payload.avatar_color,
        new_password=payload.new_password,
    )

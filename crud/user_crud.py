from sqlalchemy.orm import Session
from sqlalchemy import func
from models.user import User
from core.security import hash_password

AVATAR_COLORS = [
    "#C2603A", "#7D8B55", "#4A7C8B", "#8B6A4A", "#6B4A8B",
    "#8B4A6B", "#4A8B6B", "#8B7D4A", "#4A6B8B", "#8B4A4A",
]


def get_user(db: Session, user_id: str):
    return db.query(User).filter(User.id == user_id).first()


def get_user_by_username(db: Session, username: str):
    return db.query(User).filter(User.username == username).first()


def count_users(db: Session) -> int:
    return db.query(func.count(User.id)).scalar() or 0


def list_users(db: Session):
    return db.query(User).order_by(User.created_at).all()


def create_user(db: Session, username: str, password: str, display_name: str, is_admin: bool = False):
    # Colours rotate through the palette in registration order
    color = AVATAR_COLORS[count_users(db) % len(AVATAR_COLORS)]
    user = User(
        username=username,
        display_name=display_name,
        password_hash=hash_password(password),
        avatar_color=color,
        is_admin=is_admin,
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


def update_user(
    db: Session,
    user: User,
    display_name: str | None = None,
    avatar_color: str | None = None,
    new_password: str | None = None,
):
    if display_name:
        user.display_name = display_name
    if avatar_color:
        user.avatar_color = avatar_color
    if new_password:
        user.password_hash = hash_password(new_password)
    db.commit()
    db.refresh(user)
    return user

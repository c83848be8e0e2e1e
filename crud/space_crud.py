import logging
from sqlalchemy.orm import Session
from sqlalchemy import func
from models.project import Project
from models.space import Space, DEFAULT_ICON

logger = logging.getLogger(__name__)

DEFAULT_SPACES = [
    ("sp_kitchen", "Kitchen", "cooking-pot"),
    ("sp_bedroom", "Bedroom", "bed-double"),
    ("sp_bathroom", "Bathroom", "bath"),
    ("sp_living", "Living Room", "sofa"),
    ("sp_outdoor", "Outdoors", "trees"),
    ("sp_garage", "Garage", "warehouse"),
    ("sp_office", "Office", "monitor"),
    ("sp_hallway", "Hallway & Stairs", "door-open"),
    ("sp_dining", "Dining Room", "utensils"),
    ("sp_general", "General / Whole House", "home"),
]


def seed_default_spaces(db: Session) -> int:
    """Insert the default rooms in one transaction when no spaces exist yet."""
    if db.query(func.count(Space.id)).scalar():
        return 0
    db.add_all(Space(id=sid, name=name, icon=icon) for sid, name, icon in DEFAULT_SPACES)
    db.commit()
    logger.info("Seeded %d default spaces", len(DEFAULT_SPACES))
    return len(DEFAULT_SPACES)


def get_space(db: Session, space_id: str):
    return db.query(Space).filter(Space.id == space_id).first()


def list_spaces(db: Session):
    return (
        db.query(
            Space.id,
            Space.name,
            Space.icon,
            Space.created_by,
            func.count(Project.id).label("project_count"),
        )
        .outerjoin(Project, Project.space_id == Space.id)
        .group_by(Space.id)
        .order_by(Space.name)
        .all()
    )


def create_space(db: Session, name: str, icon: str | None, user_id: str):
    space = Space(name=name, icon=icon or DEFAULT_ICON, created_by=user_id)
    db.add(space)
    db.commit()
    db.refresh(space)
    return space


def update_space(db: Session, space_id: str, name: str | None = None, icon: str | None = None):
    space = get_space(db, space_id)
    if not space:
        return None
    if name:
        space.name = name
    if icon:
        space.icon = icon
    db.commit()
    db.refresh(space)
    return space


def delete_space(db: Session, space_id: str) -> bool:
    # Referencing projects are detached by ON DELETE SET NULL
    n = db.query(Space).filter(Space.id == space_id).delete(synchronize_session=False)
    db.commit()
    return n > 0

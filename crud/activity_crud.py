from sqlalchemy.orm import Session
from sqlalchemy import desc
from models.activity import ActivityLog
from models.project import Project
from models.user import User

RECENT_ACTIVITY_LIMIT = 50


def log_activity(db: Session, project_id: str | None, user_id: str | None, action: str, details: str = ""):
    """Stage an activity entry; the caller's commit persists it with the change it describes."""
    entry = ActivityLog(project_id=project_id, user_id=user_id, action=action, details=details)
    db.add(entry)
    return entry


def list_recent_activity(db: Session, limit: int = RECENT_ACTIVITY_LIMIT):
    return (
        db.query(
            ActivityLog.id,
            ActivityLog.project_id,
            Project.title.label("project_title"),
            ActivityLog.user_id,
            User.display_name.label("user_name"),
            User.avatar_color,
            ActivityLog.action,
            ActivityLog.details,
            ActivityLog.created_at,
        )
        .outerjoin(User, ActivityLog.user_id == User.id)
        .outerjoin(Project, ActivityLog.project_id == Project.id)
        .order_by(desc(ActivityLog.created_at))
        .limit(limit)
        .all()
    )

from sqlalchemy.orm import Session
from sqlalchemy import case, desc, func
from models.project import Project
from models.space import Space


def project_stats(db: Session) -> dict:
    is_complete = Project.status == "complete"
    totals = db.query(
        func.count(Project.id).label("total"),
        func.coalesce(func.sum(case((is_complete, 0), else_=1)), 0).label("active"),
        func.coalesce(func.sum(case((is_complete, 1), else_=0)), 0).label("completed"),
        func.coalesce(func.sum(Project.estimated_budget), 0).label("budget"),
        func.coalesce(func.sum(Project.spent_budget), 0).label("spent"),
    ).one()

    count = func.count(Project.id).label("count")
    by_space = (
        db.query(
            Space.name,
            Space.icon,
            count,
            func.coalesce(func.sum(case((is_complete, 1), else_=0)), 0).label("completed"),
        )
        .join(Project, Project.space_id == Space.id)
        .group_by(Space.id)
        .order_by(desc(count), Space.name)
        .all()
    )

    by_priority = (
        db.query(Project.priority, func.count(Project.id).label("count"))
        .filter(Project.status != "complete")
        .group_by(Project.priority)
        .order_by(Project.priority)
        .all()
    )

    return {
        "total_projects": totals.total,
        "active_projects": totals.active,
        "completed_projects": totals.completed,
        "total_budget": totals.budget,
        "total_spent": totals.spent,
        "by_space": [dict(r._mapping) for r in by_space],
        "by_priority": [dict(r._mapping) for r in by_priority],
    }

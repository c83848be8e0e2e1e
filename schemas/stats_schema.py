from schemas.common import CamelModel


class SpaceStat(CamelModel):
    name: str
    icon: str
    count: int
    completed: int


class PriorityStat(CamelModel):
    priority: str
    count: int


class StatsResponse(CamelModel):
    total_projects: int
    active_projects: int
    completed_projects: int
    total_budget: float
    total_spent: float
    by_space: list[SpaceStat]
    by_priority: list[PriorityStat]

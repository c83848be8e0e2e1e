from schemas.common import CamelModel


class SpaceCreate(CamelModel):
    name: str | None = None
    icon: str | None = None


class SpaceUpdate(CamelModel):
    name: str | None = None
    icon: str | None = None


class SpaceResponse(CamelModel):
    id: str
    name: str
    icon: str
    created_by: str | None = None
    project_count: int = 0

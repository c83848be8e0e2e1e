from schemas.common import CamelModel


class UserUpdate(CamelModel):
    display_name: str | None = None
    avatar_color: str | None = None
    current_password: str | None = None
    new_password: str | None = None


class UserResponse(CamelModel):
    id: str
    username: str
    display_name: str
    avatar_color: str
    is_admin: bool

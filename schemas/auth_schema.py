from schemas.common import CamelModel


class RegisterRequest(CamelModel):
    username: str | None = None
    password: str | None = None
    display_name: str | None = None


class LoginRequest(CamelModel):
    username: str | None = None
    password: str | None = None


class SetupStatusResponse(CamelModel):
    needs_setup: bool

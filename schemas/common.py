import os

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from core.config import settings


class CamelModel(BaseModel):
    """Accepts snake_case or camelCase keys and serializes as camelCase."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class OkResponse(BaseModel):
    ok: bool = True


def public_upload_path(stored_name: str | None) -> str:
    """Map a stored upload name to the URL path it is served under."""
    if not stored_name:
        return ""
    return f"{settings.MEDIA_URL_PATH}/{os.path.basename(stored_name)}"

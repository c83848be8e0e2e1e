from datetime import datetime
from pydantic import BaseModel


class SessionCreate(BaseModel):
    user_id: str
    token: str
    expires_at: datetime

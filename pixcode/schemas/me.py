from pydantic import BaseModel
from typing import Optional


class MeResponse(BaseModel):
    user_id: str
    email: Optional[str] = None
    role: Optional[str] = None

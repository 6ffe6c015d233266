from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict


class Credentials(BaseModel):
    # Presence and length are checked by the auth handlers so they can report specific codes
    username: Optional[str] = None
    password: Optional[str] = None


class UserBase(BaseModel):
    id: int
    username: str
    model_config = ConfigDict(from_attributes=True)


class User(UserBase):
    created_at: datetime

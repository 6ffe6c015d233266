from datetime import datetime

from pydantic import BaseModel, ConfigDict


class TeamMember(BaseModel):
    id: int
    role: str
    image_src: str
    name: str
    description: str
    created_at: datetime
    updated_at: datetime
    model_config = ConfigDict(from_attributes=True)

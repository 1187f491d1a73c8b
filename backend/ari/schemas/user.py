from datetime import datetime
from typing import Optional
from pydantic import BaseModel, ConfigDict, field_serializer


class UserPublic(BaseModel):
    """What the API shows of a user. The password hash is not part of it."""
    id: int
    email: str
    name: str
    is_active: bool
    base_id: Optional[int] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)

    @field_serializer('created_at', 'updated_at')
    def serialize_timestamps(self, value: Optional[datetime], _info):
        return value.isoformat() if value else None

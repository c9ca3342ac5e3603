# src/schemas/activity_schemas.py
from datetime import datetime
from typing import Optional
from models.enums import ActivityType
from .base_schemas import BaseSchema, IDMixin


class ActivityLog(IDMixin, BaseSchema):
    """Read-only history entry appended alongside selected writes"""

    type: ActivityType
    title: str
    description: str
    timestamp: datetime
    user_id: Optional[str] = None
    related_id: Optional[str] = None

# src/services/activity_service.py
from typing import Optional
from models.enums import ActivityType, Resource
from utils.logger import setup_logger
from utils.time_utils import iso_now
from .base_service import DocumentService

logger = setup_logger("ACTIVITY_SERVICE")


class ActivityService(DocumentService):
    """Read-only history; entries are appended as a side effect of other writes"""

    def __init__(self):
        super().__init__(Resource.ACTIVITY_LOGS)

    async def record(
        self,
        store,
        type: ActivityType,
        title: str,
        description: str,
        user_id: Optional[str] = None,
        related_id: Optional[str] = None,
    ) -> Optional[str]:
        """Append an activity entry.

        Failures are logged and swallowed so the primary write that
        triggered the entry is never affected. Returns the new entry id, or
        None when the append failed.
        """
        entry = {
            "type": ActivityType(type).value,
            "title": title,
            "description": description,
            "timestamp": iso_now(),
            "userId": user_id,
            "relatedId": related_id,
        }
        try:
            snapshot = await store.add(self.config.collection, entry)
        except Exception as e:
            logger.error(f"Failed to record {entry['type']} activity: {e}", exc_info=True)
            return None

        logger.debug(f"Recorded {entry['type']} activity {snapshot['id']}")
        return snapshot["id"]


activity_service = ActivityService()

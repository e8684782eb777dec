from datetime import datetime, timezone
from enum import Enum
from pydantic import Field
from hms.core.base import Entity

class NotificationStatus(str, Enum):
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"

class Notification(Entity):
    id_prefix = "NTF"

    type: str
    sender: str
    recipient: str
    message: str
    description: str | None = None
    status: NotificationStatus = NotificationStatus.PENDING
    sent_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

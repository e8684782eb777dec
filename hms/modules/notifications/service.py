import logging
from hms.core.exceptions import InvalidTransition
from hms.core.security import Principal
from hms.core.validation import optional_text, require_text
from hms.modules.notifications.models import Notification, NotificationStatus
from hms.modules.notifications.schemas import NotificationCreate
from hms.store.entity_store import EntityStore

log = logging.getLogger(__name__)

class NotificationsService:
    def __init__(self, store: EntityStore):
        self.store = store

    def send(self, payload: NotificationCreate, sender: Principal) -> Notification:
        m = Notification(
            type=require_text(payload.type, "Type"),
            sender=optional_text(payload.sender) or sender.name or sender.email or sender.user_id,
            recipient=require_text(payload.recipient, "Recipient"),
            message=require_text(payload.message, "Message"),
            description=optional_text(payload.description),
        )
        obj = self.store.notifications.add(m)
        log.info(f"Notification {obj.id} ({obj.type}) sent to {obj.recipient}")
        return obj

    def list(self, q: str | None = None, status: NotificationStatus | None = None) -> list[Notification]:
        needle = (q or "").lower()

        def match(n: Notification) -> bool:
            if status and n.status != status:
                return False
            if not needle:
                return True
            haystack = [n.type, n.sender, n.recipient, n.message, n.description or ""]
            return any(needle in field.lower() for field in haystack)

        return sorted(self.store.notifications.where(match), key=lambda n: n.sent_at, reverse=True)

    def get(self, notification_id: str) -> Notification | None:
        return self.store.notifications.get(notification_id)

    def decide(self, notification_id: str, decision: str) -> Notification | None:
        m = self.store.notifications.get(notification_id)
        if not m:
            return None
        if m.status != NotificationStatus.PENDING:
            raise InvalidTransition(f"Notification {notification_id} is already {m.status.value}.")
        m.status = NotificationStatus(decision)
        return self.store.notifications.edit(m)

from fastapi import APIRouter, Depends, HTTPException
from hms.core.security import Principal, get_principal, require_scopes
from hms.modules.notifications.models import Notification, NotificationStatus
from hms.modules.notifications.schemas import NotificationCreate, NotificationDecision
from hms.modules.notifications.service import NotificationsService
from hms.store.entity_store import EntityStore
from hms.store.provider import get_store

router = APIRouter()
def svc(store: EntityStore = Depends(get_store)) -> NotificationsService: return NotificationsService(store)

@router.post("", response_model=Notification, status_code=201, dependencies=[Depends(require_scopes("notifications:write"))])
async def send_notification(payload: NotificationCreate, principal: Principal = Depends(get_principal), service: NotificationsService = Depends(svc)):
    return service.send(payload, principal)

@router.get("", response_model=list[Notification], dependencies=[Depends(require_scopes("notifications:read"))])
async def list_notifications(q: str | None = None, status: NotificationStatus | None = None, service: NotificationsService = Depends(svc)):
    return service.list(q, status)

@router.get("/{notification_id}", response_model=Notification, dependencies=[Depends(require_scopes("notifications:read"))])
async def get_notification(notification_id: str, service: NotificationsService = Depends(svc)):
    obj = service.get(notification_id)
    if not obj:
        raise HTTPException(404, "Notification not found")
    return obj

@router.post("/{notification_id}/decision", response_model=Notification, dependencies=[Depends(require_scopes("notifications:write"))])
async def decide(notification_id: str, payload: NotificationDecision, service: NotificationsService = Depends(svc)):
    obj = service.decide(notification_id, payload.status)
    if not obj:
        raise HTTPException(404, "Notification not found")
    return obj

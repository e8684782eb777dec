from datetime import date
from fastapi import APIRouter, Depends
from hms.core.security import require_scopes
from hms.modules.availability.schemas import SlotTemplateIn, SlotTemplateOut, SlotsOut
from hms.modules.availability.service import AvailabilityService
from hms.store.entity_store import EntityStore
from hms.store.provider import get_store

router = APIRouter()

def svc(store: EntityStore = Depends(get_store)) -> AvailabilityService:
    return AvailabilityService(store)

@router.get("/availability/slots", response_model=SlotsOut, dependencies=[Depends(require_scopes("availability:read"))])
async def available_slots(doctor_id: str, on: date, exclude_id: str | None = None, service: AvailabilityService = Depends(svc)):
    return {"doctor_id": doctor_id, "date": on, "slots": service.available_slots(doctor_id, on, exclude_id)}

@router.get("/availability/templates/{doctor_id}", response_model=SlotTemplateOut, dependencies=[Depends(require_scopes("availability:read"))])
async def get_template(doctor_id: str, service: AvailabilityService = Depends(svc)):
    return {"doctor_id": doctor_id, "slots": service.template(doctor_id)}

@router.put("/availability/templates/{doctor_id}", response_model=SlotTemplateOut, dependencies=[Depends(require_scopes("availability:write"))])
async def set_template(doctor_id: str, payload: SlotTemplateIn, service: AvailabilityService = Depends(svc)):
    return {"doctor_id": doctor_id, "slots": service.set_template(doctor_id, payload.slots)}

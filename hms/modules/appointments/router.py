from datetime import date
from fastapi import APIRouter, Depends, HTTPException
from hms.core.security import require_scopes
from hms.modules.appointments.models import Appointment, AppointmentStatus
from hms.modules.appointments.schemas import AppointmentCreate, AppointmentStatusChange, AppointmentUpdate, StatusChangeOut
from hms.modules.appointments.service import AppointmentService
from hms.store.entity_store import EntityStore
from hms.store.provider import get_store

router = APIRouter()

def svc(store: EntityStore = Depends(get_store)) -> AppointmentService:
    return AppointmentService(store)

@router.post("", response_model=Appointment, status_code=201, dependencies=[Depends(require_scopes("appointments:write"))])
async def create_appointment(payload: AppointmentCreate, service: AppointmentService = Depends(svc)):
    return service.create(payload)

@router.get("", response_model=list[Appointment], dependencies=[Depends(require_scopes("appointments:read"))])
async def list_appointments(
    on: date | None = None, doctor_id: str | None = None, patient_id: str | None = None,
    status: AppointmentStatus | None = None, limit: int = 100, offset: int = 0,
    service: AppointmentService = Depends(svc),
):
    return service.list(on, doctor_id, patient_id, status, limit, offset)

@router.get("/{appt_id}", response_model=Appointment, dependencies=[Depends(require_scopes("appointments:read"))])
async def get_appointment(appt_id: str, service: AppointmentService = Depends(svc)):
    obj = service.get(appt_id)
    if not obj:
        raise HTTPException(404, "Appointment not found")
    return obj

@router.patch("/{appt_id}", response_model=Appointment, dependencies=[Depends(require_scopes("appointments:write"))])
async def update_appointment(appt_id: str, payload: AppointmentUpdate, service: AppointmentService = Depends(svc)):
    obj = service.update(appt_id, payload)
    if not obj:
        raise HTTPException(404, "Appointment not found")
    return obj

@router.post("/{appt_id}/status", response_model=StatusChangeOut, dependencies=[Depends(require_scopes("appointments:write"))])
async def change_status(appt_id: str, payload: AppointmentStatusChange, service: AppointmentService = Depends(svc)):
    res = service.change_status(appt_id, payload)
    if not res:
        raise HTTPException(404, "Appointment not found")
    appt, entry = res
    return {"appointment": appt, "waitlist_entry": entry}

@router.delete("/{appt_id}", status_code=204, dependencies=[Depends(require_scopes("appointments:write"))])
async def delete_appointment(appt_id: str, service: AppointmentService = Depends(svc)):
    if not service.delete(appt_id):
        raise HTTPException(404, "Appointment not found")
    return

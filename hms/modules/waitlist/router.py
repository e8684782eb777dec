from fastapi import APIRouter, Depends, HTTPException
from hms.core.security import require_scopes
from hms.modules.appointments.models import Appointment
from hms.modules.doctors.models import Doctor
from hms.modules.waitlist.models import WaitlistEntry
from hms.modules.waitlist.schemas import WaitlistCreate, WaitlistFill
from hms.modules.waitlist.service import WaitlistService
from hms.store.entity_store import EntityStore
from hms.store.provider import get_store

router = APIRouter()

def svc(store: EntityStore = Depends(get_store)) -> WaitlistService:
    return WaitlistService(store)

@router.post("", response_model=WaitlistEntry, status_code=201, dependencies=[Depends(require_scopes("waitlist:write"))])
async def add_entry(payload: WaitlistCreate, service: WaitlistService = Depends(svc)):
    return service.add(payload)

@router.get("", response_model=list[WaitlistEntry], dependencies=[Depends(require_scopes("waitlist:read"))])
async def list_entries(department: str | None = None, service: WaitlistService = Depends(svc)):
    return service.list(department)

@router.get("/{entry_id}/doctors", response_model=list[Doctor], dependencies=[Depends(require_scopes("waitlist:read"))])
async def candidate_doctors(entry_id: str, service: WaitlistService = Depends(svc)):
    doctors = service.candidate_doctors(entry_id)
    if doctors is None:
        raise HTTPException(404, "Waitlist entry not found")
    return doctors

@router.post("/{entry_id}/fill", response_model=Appointment, status_code=201, dependencies=[Depends(require_scopes("waitlist:write", "appointments:write"))])
async def fill_entry(entry_id: str, payload: WaitlistFill, service: WaitlistService = Depends(svc)):
    appt = service.fill(entry_id, payload)
    if not appt:
        raise HTTPException(404, "Waitlist entry not found")
    return appt

@router.delete("/{entry_id}", status_code=204, dependencies=[Depends(require_scopes("waitlist:write"))])
async def dismiss_entry(entry_id: str, service: WaitlistService = Depends(svc)):
    if not service.dismiss(entry_id):
        raise HTTPException(404, "Waitlist entry not found")
    return

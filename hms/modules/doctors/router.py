from fastapi import APIRouter, Depends, HTTPException
from hms.core.security import require_scopes
from hms.modules.doctors.models import Doctor
from hms.modules.doctors.schemas import DoctorCreate, DoctorSummary, DoctorUpdate
from hms.modules.doctors.service import DoctorService
from hms.store.entity_store import EntityStore
from hms.store.provider import get_store

router = APIRouter()

def svc(store: EntityStore = Depends(get_store)) -> DoctorService:
    return DoctorService(store)

@router.post("", response_model=Doctor, status_code=201, dependencies=[Depends(require_scopes("doctors:write"))])
async def create_doctor(payload: DoctorCreate, service: DoctorService = Depends(svc)):
    return service.create(payload)

@router.get("", response_model=list[Doctor], dependencies=[Depends(require_scopes("doctors:read"))])
async def list_doctors(q: str | None = None, specialization: str | None = None, city: str | None = None,
                       department: str | None = None, service: DoctorService = Depends(svc)):
    return service.list(q, specialization, city, department)

@router.get("/{doctor_id}", response_model=DoctorSummary, dependencies=[Depends(require_scopes("doctors:read"))])
async def get_doctor(doctor_id: str, service: DoctorService = Depends(svc)):
    obj = service.summary(doctor_id)
    if not obj:
        raise HTTPException(status_code=404, detail="Doctor not found")
    return obj

@router.patch("/{doctor_id}", response_model=Doctor, dependencies=[Depends(require_scopes("doctors:write"))])
async def update_doctor(doctor_id: str, payload: DoctorUpdate, service: DoctorService = Depends(svc)):
    obj = service.update(doctor_id, payload)
    if not obj:
        raise HTTPException(status_code=404, detail="Doctor not found")
    return obj

@router.delete("/{doctor_id}", status_code=204, dependencies=[Depends(require_scopes("doctors:write"))])
async def delete_doctor(doctor_id: str, service: DoctorService = Depends(svc)):
    if not service.delete(doctor_id):
        raise HTTPException(status_code=404, detail="Doctor not found")
    return

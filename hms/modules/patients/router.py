from fastapi import APIRouter, Depends, HTTPException, status
from hms.core.security import require_scopes
from hms.modules.patients.models import Patient, PatientStatus
from hms.modules.patients.schemas import PatientCreate, PatientUpdate
from hms.modules.patients.service import PatientService
from hms.store.entity_store import EntityStore
from hms.store.provider import get_store

router = APIRouter()

def svc(store: EntityStore = Depends(get_store)) -> PatientService:
    return PatientService(store)

@router.post("", response_model=Patient, status_code=201, dependencies=[Depends(require_scopes("patients:write"))])
async def create_patient(payload: PatientCreate, service: PatientService = Depends(svc)):
    return service.create(payload)

@router.get("", response_model=list[Patient], dependencies=[Depends(require_scopes("patients:read"))])
async def list_patients(
    q: str | None = None, status: PatientStatus | None = None,
    doctor_id: str | None = None, nurse_id: str | None = None,
    limit: int = 50, offset: int = 0,
    service: PatientService = Depends(svc),
):
    return service.list(q, status, doctor_id, nurse_id, limit, offset)

@router.get("/{patient_id}", response_model=Patient, dependencies=[Depends(require_scopes("patients:read"))])
async def get_patient(patient_id: str, service: PatientService = Depends(svc)):
    obj = service.get(patient_id)
    if not obj:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Patient not found")
    return obj

@router.patch("/{patient_id}", response_model=Patient, dependencies=[Depends(require_scopes("patients:write"))])
async def update_patient(patient_id: str, payload: PatientUpdate, service: PatientService = Depends(svc)):
    obj = service.update(patient_id, payload)
    if not obj:
        raise HTTPException(status_code=404, detail="Patient not found")
    return obj

@router.delete("/{patient_id}", status_code=204, dependencies=[Depends(require_scopes("patients:write"))])
async def delete_patient(patient_id: str, service: PatientService = Depends(svc)):
    ok = service.delete(patient_id)
    if not ok:
        raise HTTPException(status_code=404, detail="Patient not found")
    return

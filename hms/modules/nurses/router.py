from fastapi import APIRouter, Depends, HTTPException
from hms.core.security import require_scopes
from hms.modules.nurses.models import Nurse
from hms.modules.nurses.schemas import NurseCreate, NurseSummary, NurseUpdate
from hms.modules.nurses.service import NurseService
from hms.store.entity_store import EntityStore
from hms.store.provider import get_store

router = APIRouter()

def svc(store: EntityStore = Depends(get_store)) -> NurseService:
    return NurseService(store)

@router.post("", response_model=Nurse, status_code=201, dependencies=[Depends(require_scopes("nurses:write"))])
async def create_nurse(payload: NurseCreate, service: NurseService = Depends(svc)):
    return service.create(payload)

@router.get("", response_model=list[Nurse], dependencies=[Depends(require_scopes("nurses:read"))])
async def list_nurses(q: str | None = None, department: str | None = None, service: NurseService = Depends(svc)):
    return service.list(q, department)

@router.get("/{nurse_id}", response_model=NurseSummary, dependencies=[Depends(require_scopes("nurses:read"))])
async def get_nurse(nurse_id: str, service: NurseService = Depends(svc)):
    obj = service.summary(nurse_id)
    if not obj:
        raise HTTPException(status_code=404, detail="Nurse not found")
    return obj

@router.patch("/{nurse_id}", response_model=Nurse, dependencies=[Depends(require_scopes("nurses:write"))])
async def update_nurse(nurse_id: str, payload: NurseUpdate, service: NurseService = Depends(svc)):
    obj = service.update(nurse_id, payload)
    if not obj:
        raise HTTPException(status_code=404, detail="Nurse not found")
    return obj

@router.delete("/{nurse_id}", status_code=204, dependencies=[Depends(require_scopes("nurses:write"))])
async def delete_nurse(nurse_id: str, service: NurseService = Depends(svc)):
    if not service.delete(nurse_id):
        raise HTTPException(status_code=404, detail="Nurse not found")
    return

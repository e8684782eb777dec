from fastapi import APIRouter, Depends, HTTPException
from hms.core.security import require_scopes
from hms.modules.transfers.models import TransferRequest, TransferStatus
from hms.modules.transfers.schemas import TransferAssign, TransferCreate, TransferStatusChange
from hms.modules.transfers.service import TransferService
from hms.store.entity_store import EntityStore
from hms.store.provider import get_store

router = APIRouter()

def svc(store: EntityStore = Depends(get_store)) -> TransferService:
    return TransferService(store)

@router.post("", response_model=TransferRequest, status_code=201, dependencies=[Depends(require_scopes("transfers:write"))])
async def create_transfer(payload: TransferCreate, service: TransferService = Depends(svc)):
    return service.create(payload)

@router.get("", response_model=list[TransferRequest], dependencies=[Depends(require_scopes("transfers:read"))])
async def list_transfers(status: TransferStatus | None = None, service: TransferService = Depends(svc)):
    return service.list(status)

@router.post("/{transfer_id}/status", response_model=TransferRequest, dependencies=[Depends(require_scopes("transfers:write"))])
async def set_status(transfer_id: str, payload: TransferStatusChange, service: TransferService = Depends(svc)):
    obj = service.set_status(transfer_id, payload.status)
    if not obj:
        raise HTTPException(404, "Transfer not found")
    return obj

@router.post("/{transfer_id}/assign", response_model=TransferRequest, dependencies=[Depends(require_scopes("transfers:write"))])
async def assign_doctor(transfer_id: str, payload: TransferAssign, service: TransferService = Depends(svc)):
    obj = service.assign(transfer_id, payload.doctor_id)
    if not obj:
        raise HTTPException(404, "Transfer not found")
    return obj

@router.delete("/{transfer_id}", status_code=204, dependencies=[Depends(require_scopes("transfers:write"))])
async def delete_transfer(transfer_id: str, service: TransferService = Depends(svc)):
    if not service.delete(transfer_id):
        raise HTTPException(404, "Transfer not found")
    return

import logging
from hms.core.exceptions import InvalidTransition, ValidationFailed
from hms.core.validation import optional_text, require_text
from hms.modules.transfers.models import TransferRequest, TransferStatus
from hms.modules.transfers.schemas import TransferCreate
from hms.store.entity_store import EntityStore

log = logging.getLogger(__name__)

class TransferService:
    """Transfer queue. Every status change is an explicit clerk action."""

    def __init__(self, store: EntityStore):
        self.store = store

    def create(self, payload: TransferCreate) -> TransferRequest:
        if self.store.patients.get(payload.patient_id) is None:
            raise ValidationFailed(f"Patient {payload.patient_id} does not exist.")
        obj = TransferRequest(
            patient_id=payload.patient_id,
            from_dept=require_text(payload.from_dept, "From department"),
            to_dept=require_text(payload.to_dept, "To department"),
            reason=optional_text(payload.reason),
        )
        return self.store.transfers.add(obj)

    def get(self, transfer_id: str) -> TransferRequest | None:
        return self.store.transfers.get(transfer_id)

    def list(self, status: TransferStatus | None = None) -> list[TransferRequest]:
        items = self.store.transfers.where(lambda t: status is None or t.status == status)
        return sorted(items, key=lambda t: t.created_at, reverse=True)

    def set_status(self, transfer_id: str, status: TransferStatus) -> TransferRequest | None:
        obj = self.store.transfers.get(transfer_id)
        if not obj:
            return None
        if status == TransferStatus.ASSIGNED and not obj.assigned_doctor_id:
            raise InvalidTransition("Assign a doctor to mark the transfer as Assigned.")
        obj.status = status
        log.info(f"Transfer {transfer_id} -> {status.value}")
        return self.store.transfers.edit(obj)

    def assign(self, transfer_id: str, doctor_id: str) -> TransferRequest | None:
        obj = self.store.transfers.get(transfer_id)
        if not obj:
            return None
        doctor = self.store.doctors.get(doctor_id)
        if doctor is None or doctor.department != obj.to_dept:
            raise ValidationFailed(f"Pick a doctor from the {obj.to_dept} department.")
        obj.assigned_doctor_id = doctor_id
        if obj.status == TransferStatus.PENDING:
            obj.status = TransferStatus.ASSIGNED
        return self.store.transfers.edit(obj)

    def delete(self, transfer_id: str) -> bool:
        if self.store.transfers.get(transfer_id) is None:
            return False
        self.store.transfers.delete(transfer_id)
        return True

import logging
from pydantic import ValidationError
from hms.core.exceptions import ValidationFailed
from hms.core.validation import check_phone, optional_text, require_text
from hms.modules.patients.models import Patient, PatientStatus
from hms.modules.patients.schemas import PatientCreate, PatientUpdate
from hms.store.entity_store import EntityStore

log = logging.getLogger(__name__)

class PatientService:
    def __init__(self, store: EntityStore):
        self.store = store

    def _clean(self, data: dict) -> dict:
        data["name"] = require_text(data.get("name"), "Name")
        data["phone"] = check_phone(data.get("phone"))
        data["gender"] = optional_text(data.get("gender"))
        if not data.get("doctor_id"):
            raise ValidationFailed("Please select a doctor.")
        if not data.get("nurse_id"):
            raise ValidationFailed("Please select a nurse.")
        if self.store.doctors.get(data["doctor_id"]) is None:
            raise ValidationFailed(f"Doctor {data['doctor_id']} does not exist.")
        if self.store.nurses.get(data["nurse_id"]) is None:
            raise ValidationFailed(f"Nurse {data['nurse_id']} does not exist.")
        return data

    def create(self, payload: PatientCreate) -> Patient:
        data = self._clean(payload.model_dump())
        obj = self.store.patients.add(Patient(**data))
        log.info(f"Patient {obj.id} created")
        return obj

    def get(self, patient_id: str) -> Patient | None:
        return self.store.patients.get(patient_id)

    def list(self, q: str | None = None, status: PatientStatus | None = None, doctor_id: str | None = None,
             nurse_id: str | None = None, limit: int = 50, offset: int = 0) -> list[Patient]:
        needle = (q or "").lower()

        def match(p: Patient) -> bool:
            if needle and needle not in p.name.lower() and needle not in (p.phone or "") and needle not in p.id.lower():
                return False
            if status and p.status != status:
                return False
            if doctor_id and p.doctor_id != doctor_id:
                return False
            if nurse_id and p.nurse_id != nurse_id:
                return False
            return True

        return self.store.patients.where(match)[offset:offset + limit]

    def update(self, patient_id: str, payload: PatientUpdate) -> Patient | None:
        obj = self.store.patients.get(patient_id)
        if not obj:
            return None
        data = obj.model_dump()
        data.update(payload.model_dump(exclude_unset=True))
        data = self._clean(data)
        try:
            patient = Patient(**data)
        except ValidationError as e:
            raise ValidationFailed(f"Invalid patient: {e.errors()[0]['msg']}") from e
        return self.store.patients.edit(patient)

    def delete(self, patient_id: str) -> bool:
        """Remove the patient together with their appointments, waitlist entries and transfers."""
        if self.store.patients.get(patient_id) is None:
            return False
        with self.store.transaction():
            self.store.patients.delete(patient_id)
            appts = self.store.appointments.remove_where(lambda a: a.patient_id == patient_id)
            waits = self.store.waitlist.remove_where(lambda w: w.patient_id == patient_id)
            transfers = self.store.transfers.remove_where(lambda t: t.patient_id == patient_id)
        log.info(f"Patient {patient_id} deleted with {len(appts)} appointment(s), {len(waits)} waitlist entry(ies), {len(transfers)} transfer(s)")
        return True

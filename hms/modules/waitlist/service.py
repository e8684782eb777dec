import logging
from hms.core.exceptions import ValidationFailed
from hms.core.validation import optional_text, require_text
from hms.modules.appointments.models import Appointment
from hms.modules.appointments.schemas import AppointmentCreate
from hms.modules.appointments.service import AppointmentService
from hms.modules.doctors.models import Doctor
from hms.modules.waitlist.models import WaitlistEntry
from hms.modules.waitlist.schemas import WaitlistCreate, WaitlistFill
from hms.store.entity_store import EntityStore

log = logging.getLogger(__name__)

class WaitlistService:
    def __init__(self, store: EntityStore):
        self.store = store

    def add(self, payload: WaitlistCreate) -> WaitlistEntry:
        if self.store.patients.get(payload.patient_id) is None:
            raise ValidationFailed(f"Patient {payload.patient_id} does not exist.")
        entry = WaitlistEntry(
            patient_id=payload.patient_id,
            department=require_text(payload.department, "Department"),
            preferred_date=payload.preferred_date,
            notes=optional_text(payload.notes),
        )
        return self.store.waitlist.add(entry)

    def get(self, entry_id: str) -> WaitlistEntry | None:
        return self.store.waitlist.get(entry_id)

    # defined before `list`, which shadows the builtin inside the class body
    def candidate_doctors(self, entry_id: str) -> list[Doctor] | None:
        entry = self.store.waitlist.get(entry_id)
        if not entry:
            return None
        return self.store.doctors.where(lambda d: d.department_label == entry.department)

    def list(self, department: str | None = None) -> list[WaitlistEntry]:
        dept = (department or "").lower()
        entries = self.store.waitlist.where(lambda w: not dept or w.department.lower() == dept)
        return sorted(entries, key=lambda w: w.created_at, reverse=True)

    def dismiss(self, entry_id: str) -> bool:
        if self.store.waitlist.get(entry_id) is None:
            return False
        self.store.waitlist.delete(entry_id)
        return True

    def fill(self, entry_id: str, payload: WaitlistFill) -> Appointment | None:
        """Book the waiting patient with a doctor of the entry's department and drop the entry."""
        entry = self.store.waitlist.get(entry_id)
        if not entry:
            return None
        doctor = self.store.doctors.get(payload.doctor_id)
        if doctor is None or doctor.department_label != entry.department:
            raise ValidationFailed(f"Pick a doctor from the {entry.department} department.")
        with self.store.transaction():
            appt = AppointmentService(self.store).create(AppointmentCreate(
                patient_id=entry.patient_id, doctor_id=doctor.id, date=payload.date, time=payload.time,
            ))
            self.store.waitlist.remove_where(lambda w: w.id == entry_id)
        log.info(f"Waitlist entry {entry_id} filled by appointment {appt.id}")
        return appt

import logging
from datetime import date
from pydantic import ValidationError
from hms.core.exceptions import InvalidTransition, ValidationFailed
from hms.modules.appointments.models import Appointment, AppointmentStatus
from hms.modules.appointments.schemas import AppointmentCreate, AppointmentStatusChange, AppointmentUpdate
from hms.modules.availability.service import AvailabilityService
from hms.modules.doctors.models import UNKNOWN_DEPARTMENT
from hms.modules.waitlist.models import WaitlistEntry
from hms.store.entity_store import EntityStore

log = logging.getLogger(__name__)

S = AppointmentStatus
VALID_NEXT = {
    S.SCHEDULED: {S.CONFIRMED, S.COMPLETED, S.CANCELLED},
    S.CONFIRMED: {S.SCHEDULED, S.COMPLETED, S.CANCELLED},
    S.CANCELLED: {S.SCHEDULED},
    S.COMPLETED: set(),
}

class AppointmentService:
    def __init__(self, store: EntityStore):
        self.store = store
        self.availability = AvailabilityService(store)

    def _department_of(self, doctor_id: str) -> str:
        doctor = self.store.doctors.get(doctor_id)
        return doctor.department_label if doctor else UNKNOWN_DEPARTMENT

    def _check_refs(self, appt: Appointment) -> None:
        if self.store.patients.get(appt.patient_id) is None:
            raise ValidationFailed(f"Patient {appt.patient_id} does not exist.")
        if self.store.doctors.get(appt.doctor_id) is None:
            raise ValidationFailed(f"Doctor {appt.doctor_id} does not exist.")

    def _check_slot(self, appt: Appointment) -> None:
        appt.time = appt.time.strip()
        if appt.time not in self.store.slot_templates.get(appt.doctor_id):
            raise ValidationFailed(f"{appt.time} is not a bookable slot for doctor {appt.doctor_id}.")
        self.availability.ensure_free(appt)

    def _clear_waitlist_for(self, appt: Appointment) -> None:
        # booking a patient satisfies their waitlist entries for that department
        department = self._department_of(appt.doctor_id)
        removed = self.store.waitlist.remove_where(
            lambda w: w.patient_id == appt.patient_id and w.department == department
        )
        if removed:
            log.info(f"Appointment {appt.id} filled {len(removed)} waitlist entry(ies)")

    # ---- Appointments ----
    def create(self, payload: AppointmentCreate) -> Appointment:
        appt = Appointment(**payload.model_dump())
        self._check_refs(appt)
        if appt.is_active:
            self._check_slot(appt)
        with self.store.transaction():
            obj = self.store.appointments.add(appt)
            if obj.is_active:
                self._clear_waitlist_for(obj)
        log.info(f"Appointment {obj.id} booked: {obj.doctor_id} {obj.date} {obj.time}")
        return obj

    def get(self, appt_id: str) -> Appointment | None:
        return self.store.appointments.get(appt_id)

    def list(self, on: date | None = None, doctor_id: str | None = None, patient_id: str | None = None,
             status: AppointmentStatus | None = None, limit: int = 100, offset: int = 0) -> list[Appointment]:
        items = self.store.appointments.where(
            lambda a: (on is None or a.date == on)
            and (doctor_id is None or a.doctor_id == doctor_id)
            and (patient_id is None or a.patient_id == patient_id)
            and (status is None or a.status == status)
        )
        return items[offset:offset + limit]

    def update(self, appt_id: str, payload: AppointmentUpdate) -> Appointment | None:
        obj = self.store.appointments.get(appt_id)
        if not obj:
            return None
        data = payload.model_dump(exclude_unset=True)
        if "status" in data and data["status"] != obj.status and data["status"] not in VALID_NEXT[obj.status]:
            raise InvalidTransition(f"Cannot move appointment from {obj.status.value} to {data['status'].value}.")
        try:
            merged = Appointment(**{**obj.model_dump(), **data})
        except ValidationError as e:
            raise ValidationFailed(f"Invalid appointment: {e.errors()[0]['msg']}") from e
        self._check_refs(merged)
        if merged.is_active:
            moved = (merged.doctor_id, merged.date, merged.time) != (obj.doctor_id, obj.date, obj.time)
            if moved or not obj.is_active:
                self._check_slot(merged)
            else:
                self.availability.ensure_free(merged)
        return self.store.appointments.edit(merged)

    def change_status(self, appt_id: str, payload: AppointmentStatusChange) -> tuple[Appointment, WaitlistEntry | None] | None:
        obj = self.store.appointments.get(appt_id)
        if not obj:
            return None
        nxt = payload.status
        if nxt == obj.status:
            return obj, None
        if nxt not in VALID_NEXT[obj.status]:
            raise InvalidTransition(f"Cannot move appointment from {obj.status.value} to {nxt.value}.")
        prev = obj.status
        obj.status = nxt
        if prev == S.CANCELLED:
            # reactivating must land on a slot the doctor still offers, and a free one
            self._check_slot(obj)

        entry = None
        with self.store.transaction():
            obj = self.store.appointments.edit(obj)
            if nxt == S.CANCELLED and payload.add_to_waitlist:
                doctor = self.store.doctors.get(obj.doctor_id)
                doctor_name = doctor.name if doctor else obj.doctor_id
                entry = self.store.waitlist.add(WaitlistEntry(
                    patient_id=obj.patient_id,
                    department=self._department_of(obj.doctor_id),
                    preferred_date=obj.date,
                    notes=payload.notes or f"Cancelled {doctor_name} {obj.time}",
                ))
        log.info(f"Appointment {obj.id} {prev.value} -> {nxt.value}")
        return obj, entry

    def delete(self, appt_id: str) -> bool:
        if self.store.appointments.get(appt_id) is None:
            return False
        self.store.appointments.delete(appt_id)
        return True

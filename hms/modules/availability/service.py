import logging
from datetime import date
from hms.core.exceptions import NotFound, SlotConflict
from hms.modules.appointments.booking_logic import clashes, free_slots
from hms.modules.appointments.models import Appointment
from hms.store.entity_store import EntityStore

log = logging.getLogger(__name__)

class AvailabilityService:
    def __init__(self, store: EntityStore):
        self.store = store

    def _require_doctor(self, doctor_id: str) -> None:
        if self.store.doctors.get(doctor_id) is None:
            raise NotFound("Doctor", doctor_id)

    # ---- Slot templates ----
    def template(self, doctor_id: str) -> list[str]:
        self._require_doctor(doctor_id)
        return self.store.slot_templates.get(doctor_id)

    def set_template(self, doctor_id: str, slots: list[str]) -> list[str]:
        self._require_doctor(doctor_id)
        saved = self.store.slot_templates.set(doctor_id, slots)
        log.info(f"Slot template for {doctor_id} set to {len(saved)} slot(s)")
        return saved

    # ---- Resolver ----
    def available_slots(self, doctor_id: str, on: date, exclude_id: str | None = None) -> list[str]:
        template = self.template(doctor_id)
        return free_slots(template, self.store.appointments.all(), doctor_id, on, exclude_id)

    # ---- Conflict guard ----
    def would_clash(self, candidate: Appointment) -> bool:
        return clashes(candidate, self.store.appointments.all())

    def ensure_free(self, candidate: Appointment) -> None:
        if self.would_clash(candidate):
            log.info(f"Rejected {candidate.doctor_id} {candidate.date} {candidate.time}: slot taken")
            raise SlotConflict()

import logging
from hms.core.exceptions import DependentRecords
from hms.core.validation import check_phone, optional_text, require_text
from hms.modules.doctors.models import Doctor
from hms.modules.doctors.schemas import DoctorCreate, DoctorSummary, DoctorUpdate
from hms.store.entity_store import EntityStore

log = logging.getLogger(__name__)

def filter_doctors(doctors: list[Doctor], specialization: str | None = None, city: str | None = None) -> list[Doctor]:
    """Case-insensitive substring filter, as used by the directory and the dashboard."""
    spec = (specialization or "").lower()
    town = (city or "").lower()
    return [
        d for d in doctors
        if (not spec or spec in d.specialization.lower())
        and (not town or town in (d.city or "").lower())
    ]

class DoctorService:
    def __init__(self, store: EntityStore):
        self.store = store

    def _clean(self, data: dict) -> dict:
        data["name"] = require_text(data.get("name"), "Doctor name")
        data["specialization"] = require_text(data.get("specialization"), "Specialization")
        data["department"] = optional_text(data.get("department"))
        data["city"] = optional_text(data.get("city"))
        data["phone"] = check_phone(data.get("phone"))
        return data

    def create(self, payload: DoctorCreate) -> Doctor:
        data = payload.model_dump(exclude={"slots"})
        data = self._clean(data)
        with self.store.transaction():
            obj = self.store.doctors.add(Doctor(**data))
            if payload.slots:
                self.store.slot_templates.set(obj.id, payload.slots)
        log.info(f"Doctor {obj.id} created")
        return obj

    def get(self, doctor_id: str) -> Doctor | None:
        return self.store.doctors.get(doctor_id)

    def list(self, q: str | None = None, specialization: str | None = None, city: str | None = None,
             department: str | None = None) -> list[Doctor]:
        doctors = filter_doctors(self.store.doctors.all(), specialization, city)
        if department:
            doctors = [d for d in doctors if (d.department or "").lower() == department.lower()]
        if q:
            needle = q.lower()
            doctors = [d for d in doctors if needle in d.name.lower() or needle in d.id.lower()]
        return doctors

    def summary(self, doctor_id: str) -> DoctorSummary | None:
        obj = self.store.doctors.get(doctor_id)
        if not obj:
            return None
        return DoctorSummary(
            doctor=obj,
            patients=self.store.patients.where(lambda p: p.doctor_id == doctor_id),
            appointment_count=self.store.appointments.count(lambda a: a.doctor_id == doctor_id),
            slots=self.store.slot_templates.get(doctor_id),
        )

    def update(self, doctor_id: str, payload: DoctorUpdate) -> Doctor | None:
        obj = self.store.doctors.get(doctor_id)
        if not obj:
            return None
        data = obj.model_dump()
        data.update(payload.model_dump(exclude_unset=True))
        return self.store.doctors.edit(Doctor(**self._clean(data)))

    def delete(self, doctor_id: str) -> bool:
        """Refused while any patient or appointment still references the doctor."""
        if self.store.doctors.get(doctor_id) is None:
            return False
        dependents = {
            "patient(s)": self.store.patients.count(lambda p: p.doctor_id == doctor_id),
            "appointment(s)": self.store.appointments.count(lambda a: a.doctor_id == doctor_id),
        }
        if any(dependents.values()):
            raise DependentRecords("Doctor", doctor_id, dependents)
        with self.store.transaction():
            self.store.doctors.delete(doctor_id)
            self.store.slot_templates.remove(doctor_id)
        log.info(f"Doctor {doctor_id} deleted")
        return True

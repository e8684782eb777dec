import datetime as dt
from enum import Enum
from hms.core.base import Entity

class AppointmentStatus(str, Enum):
    SCHEDULED = "Scheduled"
    CONFIRMED = "Confirmed"
    COMPLETED = "Completed"
    CANCELLED = "Cancelled"

class Appointment(Entity):
    id_prefix = "A"

    patient_id: str
    doctor_id: str
    date: dt.date
    time: str  # slot template label, e.g. "10:00 AM"
    status: AppointmentStatus = AppointmentStatus.SCHEDULED

    @property
    def is_active(self) -> bool:
        return self.status != AppointmentStatus.CANCELLED

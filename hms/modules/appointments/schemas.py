import datetime as dt
from pydantic import BaseModel, Field, field_validator
from hms.modules.appointments.models import Appointment, AppointmentStatus
from hms.modules.waitlist.models import WaitlistEntry

class AppointmentCreate(BaseModel):
    patient_id: str = Field(..., min_length=1)
    doctor_id: str = Field(..., min_length=1)
    date: dt.date
    time: str = Field(..., min_length=1)
    status: AppointmentStatus = AppointmentStatus.SCHEDULED

class AppointmentUpdate(BaseModel):
    # allow updating a subset of fields
    patient_id: str | None = None
    doctor_id: str | None = None
    date: dt.date | None = None
    time: str | None = None
    status: AppointmentStatus | None = None

    @field_validator("patient_id", "doctor_id", "date", "time", "status")
    @classmethod
    def _not_null(cls, v):
        # fields may be left out, but not cleared
        if v is None:
            raise ValueError("must not be null")
        return v

class AppointmentStatusChange(BaseModel):
    status: AppointmentStatus
    add_to_waitlist: bool = False  # only meaningful when cancelling
    notes: str | None = None

class StatusChangeOut(BaseModel):
    appointment: Appointment
    waitlist_entry: WaitlistEntry | None = None

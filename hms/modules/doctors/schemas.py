from datetime import date
from pydantic import BaseModel, Field
from hms.modules.doctors.models import Doctor
from hms.modules.patients.models import Patient

class DoctorCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=200)
    specialization: str = Field(..., min_length=1)
    department: str | None = None
    city: str | None = None
    phone: str | None = None
    dob: date | None = None
    slots: list[str] | None = None  # optional initial slot template

class DoctorUpdate(BaseModel):
    name: str | None = None
    specialization: str | None = None
    department: str | None = None
    city: str | None = None
    phone: str | None = None
    dob: date | None = None

class DoctorSummary(BaseModel):
    doctor: Doctor
    patients: list[Patient]
    appointment_count: int
    slots: list[str]

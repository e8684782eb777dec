from datetime import date
from pydantic import BaseModel, Field
from hms.modules.patients.models import PatientStatus

class PatientCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=200)
    dob: date | None = None
    status: PatientStatus = PatientStatus.ACTIVE
    gender: str | None = None
    phone: str | None = None
    doctor_id: str = Field(..., min_length=1)
    nurse_id: str = Field(..., min_length=1)

class PatientUpdate(BaseModel):
    name: str | None = None
    dob: date | None = None
    status: PatientStatus | None = None
    gender: str | None = None
    phone: str | None = None
    doctor_id: str | None = None
    nurse_id: str | None = None

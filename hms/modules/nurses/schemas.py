from datetime import date
from pydantic import BaseModel, Field
from hms.modules.nurses.models import Nurse
from hms.modules.patients.models import Patient

class NurseCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=200)
    department: str = Field(..., min_length=1)
    phone: str | None = None
    dob: date | None = None

class NurseUpdate(BaseModel):
    name: str | None = None
    department: str | None = None
    phone: str | None = None
    dob: date | None = None

class NurseSummary(BaseModel):
    nurse: Nurse
    patients: list[Patient]

import datetime as dt
from pydantic import BaseModel, Field

class WaitlistCreate(BaseModel):
    patient_id: str = Field(..., min_length=1)
    department: str = Field(..., min_length=1)
    preferred_date: dt.date | None = None
    notes: str | None = None

class WaitlistFill(BaseModel):
    doctor_id: str = Field(..., min_length=1)
    date: dt.date
    time: str = Field(..., min_length=1)

from pydantic import BaseModel, Field
from hms.modules.transfers.models import TransferStatus

class TransferCreate(BaseModel):
    patient_id: str = Field(..., min_length=1)
    from_dept: str = Field(..., min_length=1)
    to_dept: str = Field(..., min_length=1)
    reason: str | None = None

class TransferStatusChange(BaseModel):
    status: TransferStatus

class TransferAssign(BaseModel):
    doctor_id: str = Field(..., min_length=1)

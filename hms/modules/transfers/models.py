from datetime import datetime, timezone
from enum import Enum
from pydantic import Field
from hms.core.base import Entity

class TransferStatus(str, Enum):
    PENDING = "Pending"
    ASSIGNED = "Assigned"
    APPROVED = "Approved"
    NEED_INFO = "Need Info"

class TransferRequest(Entity):
    id_prefix = "T"

    patient_id: str
    from_dept: str
    to_dept: str
    reason: str | None = None
    status: TransferStatus = TransferStatus.PENDING
    assigned_doctor_id: str | None = None
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

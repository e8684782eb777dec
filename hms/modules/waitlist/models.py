from datetime import date, datetime, timezone
from pydantic import Field
from hms.core.base import Entity

class WaitlistEntry(Entity):
    id_prefix = "W"

    patient_id: str
    department: str
    preferred_date: date | None = None
    notes: str | None = None
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

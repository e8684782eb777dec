from datetime import date
from hms.core.base import Entity

# department shown for doctors that have none; waitlist entries can carry it too
UNKNOWN_DEPARTMENT = "Unknown"

class Doctor(Entity):
    id_prefix = "D"

    name: str
    specialization: str
    department: str | None = None
    city: str | None = None
    phone: str | None = None
    dob: date | None = None

    @property
    def department_label(self) -> str:
        return self.department or UNKNOWN_DEPARTMENT

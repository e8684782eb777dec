from datetime import date
from hms.core.base import Entity

class Nurse(Entity):
    id_prefix = "N"

    name: str
    department: str
    phone: str | None = None
    dob: date | None = None

from datetime import date
from enum import Enum
from hms.core.base import Entity

class PatientStatus(str, Enum):
    ACTIVE = "Active"
    IN_TREATMENT = "In Treatment"
    RECOVERED = "Recovered"
    DISCHARGED = "Discharged"
    UNKNOWN = "Unknown"

# statuses counted as "under care" on the dashboard
UNDER_CARE = {PatientStatus.ACTIVE, PatientStatus.IN_TREATMENT}

class Patient(Entity):
    id_prefix = "P"

    name: str
    dob: date | None = None
    status: PatientStatus = PatientStatus.ACTIVE
    gender: str | None = None
    phone: str | None = None
    doctor_id: str | None = None
    nurse_id: str | None = None

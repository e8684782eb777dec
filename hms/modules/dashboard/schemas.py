import datetime as dt
from typing import Literal
from pydantic import BaseModel
from hms.modules.appointments.models import Appointment
from hms.modules.doctors.models import Doctor

class DepartmentCount(BaseModel):
    name: str
    value: int

class DepartmentBreakdown(BaseModel):
    source: Literal["appointments", "doctors"]
    departments: list[DepartmentCount]

class Kpis(BaseModel):
    patients_under_care: int
    doctors_on_duty: int
    nurses_assigned: int
    appointments_today: int

class Alerts(BaseModel):
    day: dt.date
    visits_on_day: list[Appointment]
    cancelled_in_window: list[Appointment]

class Queues(BaseModel):
    waitlist: int
    transfers_open: int

class UtilizationCell(BaseModel):
    day: dt.date
    filled: int
    total: int
    pct: int

class UtilizationRow(BaseModel):
    doctor_id: str
    doctor: str
    department: str | None = None
    days: list[UtilizationCell]

class DashboardOut(BaseModel):
    timeframe: str
    start: dt.date | None = None
    end: dt.date | None = None
    kpis: Kpis
    departments: DepartmentBreakdown
    appointments: list[Appointment]
    patient_status: dict[str, int]
    alerts: Alerts
    queues: Queues
    utilization: list[UtilizationRow]
    doctors: list[Doctor]

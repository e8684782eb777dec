"""
Pure dashboard aggregations over plain entity lists.

Nothing here touches the store; ``DashboardService`` gathers the inputs and
hands them over, so every function can be tested with literal lists.
"""
from datetime import date, timedelta
from typing import Iterable, Literal
from hms.core.exceptions import ValidationFailed
from hms.modules.appointments.models import Appointment, AppointmentStatus
from hms.modules.doctors.models import UNKNOWN_DEPARTMENT, Doctor
from hms.modules.nurses.models import Nurse
from hms.modules.patients.models import Patient, PatientStatus, UNDER_CARE

Timeframe = Literal["today", "7d", "30d", "all", "custom"]
Window = tuple[date | None, date | None]

UTILIZATION_DAYS = 7

def resolve_window(timeframe: Timeframe, today: date, start: date | None = None, end: date | None = None) -> Window:
    """Inclusive [start, end] bounds for a timeframe; ``None`` means open on that side."""
    if timeframe == "today":
        return today, today
    if timeframe == "7d":
        return today - timedelta(days=6), today
    if timeframe == "30d":
        return today - timedelta(days=29), today
    if timeframe == "all":
        return None, None
    if timeframe == "custom":
        if start and end and start > end:
            raise ValidationFailed(f"Custom range start {start} is after end {end}.")
        return start, end
    raise ValidationFailed(f"Unknown timeframe {timeframe!r}.")

def in_window(day: date, window: Window) -> bool:
    lo, hi = window
    return (lo is None or day >= lo) and (hi is None or day <= hi)

def appointments_in_window(appointments: Iterable[Appointment], window: Window) -> list[Appointment]:
    return [a for a in appointments if in_window(a.date, window)]

def department_of(doctor_id: str, doctors_by_id: dict[str, Doctor]) -> str:
    doctor = doctors_by_id.get(doctor_id)
    return doctor.department_label if doctor else UNKNOWN_DEPARTMENT

def department_breakdown(in_window_appts: list[Appointment], doctors: list[Doctor],
                         fallback_doctors: list[Doctor] | None = None) -> tuple[str, dict[str, int]]:
    """Appointments per department of their doctor.

    With no appointments in the window the chart would be empty, so doctors are
    counted per department instead (``fallback_doctors`` when a doctor filter
    is active). Returns the source used ("appointments" or "doctors") and the counts,
    keyed in first-seen order.
    """
    counts: dict[str, int] = {}
    by_id = {d.id: d for d in doctors}
    for a in in_window_appts:
        dep = department_of(a.doctor_id, by_id)
        counts[dep] = counts.get(dep, 0) + 1
    if counts:
        return "appointments", counts
    for d in (doctors if fallback_doctors is None else fallback_doctors):
        dep = d.department_label
        counts[dep] = counts.get(dep, 0) + 1
    return "doctors", counts

def kpis(patients: list[Patient], doctors: list[Doctor], nurses: list[Nurse],
         appointments: list[Appointment], today: date) -> dict[str, int]:
    return {
        "patients_under_care": sum(1 for p in patients if p.status in UNDER_CARE),
        "doctors_on_duty": len(doctors),
        "nurses_assigned": len(nurses),
        "appointments_today": sum(1 for a in appointments if a.date == today),
    }

def patient_status_counts(patients: list[Patient]) -> dict[str, int]:
    counts = {s.value: 0 for s in PatientStatus}
    for p in patients:
        counts[p.status.value] += 1
    return counts

def alerts(appointments: list[Appointment], in_window_appts: list[Appointment], day: date) -> dict[str, list[Appointment]]:
    return {
        "visits_on_day": [a for a in appointments if a.date == day],
        "cancelled_in_window": [a for a in in_window_appts if a.status == AppointmentStatus.CANCELLED],
    }

def utilization(doctors: list[Doctor], templates: dict[str, list[str]], appointments: list[Appointment],
                today: date, days: int = UTILIZATION_DAYS) -> list[dict]:
    """Filled share of each doctor's template for ``days`` days starting today.

    A doctor without a template counts as one slot per day so the ratio stays defined.
    """
    horizon = [today + timedelta(days=i) for i in range(days)]
    rows = []
    for doc in doctors:
        total = len(templates.get(doc.id, [])) or 1
        cells = []
        for day in horizon:
            filled = sum(1 for a in appointments if a.doctor_id == doc.id and a.date == day and a.is_active)
            cells.append({"day": day, "filled": filled, "total": total, "pct": round(filled / total * 100)})
        rows.append({"doctor_id": doc.id, "doctor": doc.name, "department": doc.department, "days": cells})
    return rows

"""Slot resolution and double-booking checks over plain appointment lists."""
from datetime import date
from typing import Iterable
from hms.modules.appointments.models import Appointment

def taken_labels(appointments: Iterable[Appointment], doctor_id: str, on: date, exclude_id: str | None = None) -> set[str]:
    return {
        a.time for a in appointments
        if a.doctor_id == doctor_id and a.date == on and a.is_active and a.id != exclude_id
    }

def free_slots(template: list[str], appointments: Iterable[Appointment], doctor_id: str, on: date, exclude_id: str | None = None) -> list[str]:
    """Template labels not held by an active appointment, in template order."""
    taken = taken_labels(appointments, doctor_id, on, exclude_id)
    return [label for label in template if label not in taken]

def clashes(candidate: Appointment, appointments: Iterable[Appointment]) -> bool:
    """True when another active appointment holds the candidate's doctor/date/time."""
    if not candidate.is_active:
        return False
    return any(
        a.id != candidate.id
        and a.is_active
        and a.doctor_id == candidate.doctor_id
        and a.date == candidate.date
        and a.time == candidate.time
        for a in appointments
    )

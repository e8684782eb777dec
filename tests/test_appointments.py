from datetime import date
import pytest
from hms.core.exceptions import InvalidTransition, SlotConflict, ValidationFailed
from hms.modules.appointments.models import AppointmentStatus as S
from hms.modules.appointments.schemas import AppointmentCreate, AppointmentStatusChange, AppointmentUpdate
from hms.modules.appointments.service import AppointmentService
from hms.modules.waitlist.schemas import WaitlistCreate
from hms.modules.waitlist.service import WaitlistService

DAY = date(2025, 12, 20)


def book(store, patient="P-002", doctor="D-001", on=DAY, time="11:00 AM"):
    return AppointmentService(store).create(AppointmentCreate(patient_id=patient, doctor_id=doctor, date=on, time=time))


def test_create_requires_known_patient_and_doctor(store):
    with pytest.raises(ValidationFailed):
        book(store, patient="P-404")
    with pytest.raises(ValidationFailed):
        book(store, doctor="D-404")


def test_cancelled_slot_can_be_rebooked(store):
    svc = AppointmentService(store)
    svc.change_status("A-001", AppointmentStatusChange(status=S.CANCELLED))
    obj = book(store, time="10:00 AM")
    assert obj.status == S.SCHEDULED


def test_reactivating_cancelled_appointment_is_guarded(store):
    svc = AppointmentService(store)
    svc.change_status("A-001", AppointmentStatusChange(status=S.CANCELLED))
    book(store, time="10:00 AM")
    with pytest.raises(SlotConflict):
        svc.change_status("A-001", AppointmentStatusChange(status=S.SCHEDULED))
    assert store.appointments.get("A-001").status == S.CANCELLED


def test_completed_is_terminal(store):
    svc = AppointmentService(store)
    svc.change_status("A-001", AppointmentStatusChange(status=S.COMPLETED))
    with pytest.raises(InvalidTransition):
        svc.change_status("A-001", AppointmentStatusChange(status=S.SCHEDULED))


def test_cancel_with_waitlist_creates_entry(store):
    appt, entry = AppointmentService(store).change_status(
        "A-001", AppointmentStatusChange(status=S.CANCELLED, add_to_waitlist=True))
    assert appt.status == S.CANCELLED
    assert entry.patient_id == "P-001"
    assert entry.department == "Dermatology"
    assert entry.preferred_date == DAY
    assert entry.notes == "Cancelled Dr. Omar Khaled 10:00 AM"
    assert store.waitlist.get(entry.id) is not None


def test_cancel_without_waitlist(store):
    _, entry = AppointmentService(store).change_status("A-001", AppointmentStatusChange(status=S.CANCELLED))
    assert entry is None
    assert len(store.waitlist) == 0


def test_move_checks_target_slot(store):
    svc = AppointmentService(store)
    other = book(store, time="11:00 AM")
    with pytest.raises(SlotConflict):
        svc.update(other.id, AppointmentUpdate(time="10:00 AM"))
    moved = svc.update(other.id, AppointmentUpdate(time="02:00 PM"))
    assert moved.time == "02:00 PM"


def test_update_keeping_own_slot_is_allowed(store):
    obj = AppointmentService(store).update("A-001", AppointmentUpdate(status=S.CONFIRMED))
    assert obj.status == S.CONFIRMED
    assert obj.time == "10:00 AM"


def test_booking_clears_patient_waitlist_for_department(store):
    WaitlistService(store).add(WaitlistCreate(patient_id="P-002", department="Dermatology"))
    WaitlistService(store).add(WaitlistCreate(patient_id="P-002", department="Neurology"))
    book(store, patient="P-002", doctor="D-001", time="09:00 AM")
    assert [w.department for w in store.waitlist.all()] == ["Neurology"]


def test_list_filters(store):
    svc = AppointmentService(store)
    assert [a.id for a in svc.list(doctor_id="D-002")] == ["A-002"]
    assert [a.id for a in svc.list(on=DAY, status=S.SCHEDULED)] == ["A-001"]


def test_reactivation_requires_slot_still_in_template(store):
    svc = AppointmentService(store)
    svc.change_status("A-001", AppointmentStatusChange(status=S.CANCELLED))
    store.slot_templates.set("D-001", ["09:00 AM"])
    with pytest.raises(ValidationFailed):
        svc.change_status("A-001", AppointmentStatusChange(status=S.SCHEDULED))
    assert store.appointments.get("A-001").status == S.CANCELLED


def test_update_rejects_cleared_fields():
    from pydantic import ValidationError
    with pytest.raises(ValidationError):
        AppointmentUpdate(status=None)
    assert AppointmentUpdate(time="09:00 AM").model_dump(exclude_unset=True) == {"time": "09:00 AM"}

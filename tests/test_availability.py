from datetime import date
import pytest
from hms.core.exceptions import NotFound, SlotConflict, ValidationFailed
from hms.modules.appointments.booking_logic import clashes, free_slots
from hms.modules.appointments.models import Appointment, AppointmentStatus
from hms.modules.appointments.schemas import AppointmentCreate
from hms.modules.appointments.service import AppointmentService
from hms.modules.availability.service import AvailabilityService

DAY = date(2025, 12, 20)
TEMPLATE = ["09:00", "10:00", "11:00"]


def appt(id, time, status=AppointmentStatus.SCHEDULED, doctor="X", on=DAY):
    return Appointment(id=id, patient_id="P-1", doctor_id=doctor, date=on, time=time, status=status)


def test_taken_slot_is_removed_and_order_kept():
    assert free_slots(TEMPLATE, [appt("A-1", "10:00")], "X", DAY) == ["09:00", "11:00"]


def test_cancelled_and_other_doctor_or_day_do_not_take_slots():
    appts = [
        appt("A-1", "09:00", AppointmentStatus.CANCELLED),
        appt("A-2", "10:00", doctor="Y"),
        appt("A-3", "11:00", on=date(2025, 12, 21)),
    ]
    assert free_slots(TEMPLATE, appts, "X", DAY) == TEMPLATE


def test_edited_appointment_keeps_its_own_slot_on_offer():
    assert free_slots(TEMPLATE, [appt("A-1", "10:00")], "X", DAY, exclude_id="A-1") == TEMPLATE


def test_result_is_subset_of_template():
    appts = [appt("A-1", "11:00"), appt("A-2", "12:00")]
    slots = free_slots(TEMPLATE, appts, "X", DAY)
    assert slots == [s for s in TEMPLATE if s in slots]
    assert "11:00" not in slots


def test_clash_rules():
    existing = [appt("A-1", "10:00")]
    assert clashes(appt("A-2", "10:00"), existing)
    assert not clashes(appt("A-1", "10:00"), existing)  # same appointment being edited
    assert not clashes(appt("A-2", "10:00", AppointmentStatus.CANCELLED), existing)
    assert not clashes(appt("A-2", "10:00"), [appt("A-1", "10:00", AppointmentStatus.CANCELLED)])
    assert not clashes(appt("A-2", "09:00"), existing)


def test_resolver_against_store(store):
    svc = AvailabilityService(store)
    # seeded A-001 holds D-001 10:00 AM on 2025-12-20
    assert svc.available_slots("D-001", DAY) == ["09:00 AM", "11:00 AM", "02:00 PM", "03:00 PM"]
    assert svc.available_slots("D-001", date(2025, 12, 21)) == store.slot_templates.get("D-001")


def test_unknown_doctor_and_missing_template(store):
    svc = AvailabilityService(store)
    with pytest.raises(NotFound):
        svc.available_slots("D-404", DAY)
    store.slot_templates.remove("D-002")
    assert svc.available_slots("D-002", DAY) == []


def test_double_booking_rejected_end_to_end(store):
    AvailabilityService(store).set_template("D-001", TEMPLATE)
    svc = AppointmentService(store)
    svc.create(AppointmentCreate(patient_id="P-001", doctor_id="D-001", date=DAY, time="10:00"))
    assert AvailabilityService(store).available_slots("D-001", DAY) == ["09:00", "11:00"]
    with pytest.raises(SlotConflict) as exc:
        svc.create(AppointmentCreate(patient_id="P-002", doctor_id="D-001", date=DAY, time="10:00"))
    assert exc.value.message == "This slot is already booked for the selected doctor."


def test_label_outside_template_rejected(store):
    with pytest.raises(ValidationFailed):
        AppointmentService(store).create(
            AppointmentCreate(patient_id="P-001", doctor_id="D-001", date=DAY, time="07:00 AM"))

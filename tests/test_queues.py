from datetime import date
import pytest
from hms.core.exceptions import InvalidTransition, SlotConflict, ValidationFailed
from hms.modules.transfers.models import TransferStatus
from hms.modules.transfers.schemas import TransferCreate
from hms.modules.transfers.service import TransferService
from hms.modules.waitlist.schemas import WaitlistCreate, WaitlistFill
from hms.modules.waitlist.service import WaitlistService

DAY = date(2025, 12, 22)


@pytest.fixture
def entry(store):
    return WaitlistService(store).add(WaitlistCreate(patient_id="P-002", department="Dermatology", notes="any morning"))


def test_add_requires_known_patient(store):
    with pytest.raises(ValidationFailed):
        WaitlistService(store).add(WaitlistCreate(patient_id="P-404", department="Dermatology"))


def test_candidates_are_department_doctors(store, entry):
    assert [d.id for d in WaitlistService(store).candidate_doctors(entry.id)] == ["D-001"]


def test_fill_books_and_removes_entry(store, entry):
    appt = WaitlistService(store).fill(entry.id, WaitlistFill(doctor_id="D-001", date=DAY, time="09:00 AM"))
    assert appt.patient_id == "P-002"
    assert store.appointments.get(appt.id) is not None
    assert store.waitlist.get(entry.id) is None


def test_fill_rejects_doctor_from_other_department(store, entry):
    with pytest.raises(ValidationFailed):
        WaitlistService(store).fill(entry.id, WaitlistFill(doctor_id="D-002", date=DAY, time="10:00 AM"))
    assert store.waitlist.get(entry.id) is not None


def test_failed_fill_keeps_entry(store, entry):
    with pytest.raises(SlotConflict):
        WaitlistService(store).fill(entry.id, WaitlistFill(doctor_id="D-001", date=date(2025, 12, 20), time="10:00 AM"))
    assert store.waitlist.get(entry.id) is not None
    assert len(store.appointments) == 2


def test_dismiss(store, entry):
    assert WaitlistService(store).dismiss(entry.id) is True
    assert WaitlistService(store).dismiss(entry.id) is False


def test_transfer_assign_flow(store):
    svc = TransferService(store)
    tr = svc.create(TransferCreate(patient_id="P-001", from_dept="Dermatology", to_dept="Neurology", reason="headaches"))
    assert tr.status == TransferStatus.PENDING
    with pytest.raises(InvalidTransition):
        svc.set_status(tr.id, TransferStatus.ASSIGNED)
    with pytest.raises(ValidationFailed):
        svc.assign(tr.id, "D-001")
    assigned = svc.assign(tr.id, "D-002")
    assert assigned.status == TransferStatus.ASSIGNED
    assert assigned.assigned_doctor_id == "D-002"
    approved = svc.set_status(tr.id, TransferStatus.APPROVED)
    assert approved.status == TransferStatus.APPROVED
    assert [t.id for t in svc.list(status=TransferStatus.APPROVED)] == [tr.id]


def test_transfer_need_info_keeps_status_on_reassign(store):
    svc = TransferService(store)
    tr = svc.create(TransferCreate(patient_id="P-001", from_dept="Dermatology", to_dept="Neurology"))
    svc.set_status(tr.id, TransferStatus.NEED_INFO)
    again = svc.assign(tr.id, "D-002")
    assert again.status == TransferStatus.NEED_INFO


def test_unknown_department_entry_can_be_filled(store):
    from hms.modules.appointments.models import AppointmentStatus
    from hms.modules.appointments.schemas import AppointmentCreate, AppointmentStatusChange
    from hms.modules.appointments.service import AppointmentService
    from hms.modules.doctors.models import Doctor

    store.doctors.add(Doctor(id="D-010", name="Dr. Roaming", specialization="General Practice"))
    store.slot_templates.set("D-010", ["09:00 AM", "10:00 AM"])
    appts = AppointmentService(store)
    booked = appts.create(AppointmentCreate(patient_id="P-002", doctor_id="D-010", date=DAY, time="09:00 AM"))
    _, entry = appts.change_status(booked.id, AppointmentStatusChange(status=AppointmentStatus.CANCELLED,
                                                                      add_to_waitlist=True))
    assert entry.department == "Unknown"

    svc = WaitlistService(store)
    assert [d.id for d in svc.candidate_doctors(entry.id)] == ["D-010"]
    appt = svc.fill(entry.id, WaitlistFill(doctor_id="D-010", date=DAY, time="10:00 AM"))
    assert appt.doctor_id == "D-010"
    assert store.waitlist.get(entry.id) is None

from datetime import date
import pytest
from hms.core.exceptions import ValidationFailed
from hms.modules.appointments.models import Appointment, AppointmentStatus
from hms.modules.appointments.schemas import AppointmentStatusChange
from hms.modules.appointments.service import AppointmentService
from hms.modules.dashboard import aggregation as agg
from hms.modules.dashboard.service import DashboardService
from hms.modules.doctors.models import Doctor

TODAY = date(2025, 12, 20)


def appt(id, on, doctor="D-1", status=AppointmentStatus.SCHEDULED, time="10:00"):
    return Appointment(id=id, patient_id="P-1", doctor_id=doctor, date=on, time=time, status=status)


@pytest.mark.parametrize("timeframe,expected", [
    ("today", (TODAY, TODAY)),
    ("7d", (date(2025, 12, 14), TODAY)),
    ("30d", (date(2025, 11, 21), TODAY)),
    ("all", (None, None)),
])
def test_windows(timeframe, expected):
    assert agg.resolve_window(timeframe, TODAY) == expected


def test_custom_window():
    assert agg.resolve_window("custom", TODAY, start=date(2025, 1, 1)) == (date(2025, 1, 1), None)
    with pytest.raises(ValidationFailed):
        agg.resolve_window("custom", TODAY, start=date(2025, 2, 1), end=date(2025, 1, 1))


def test_window_bounds_are_inclusive():
    window = agg.resolve_window("7d", TODAY)
    assert agg.in_window(date(2025, 12, 14), window)
    assert agg.in_window(TODAY, window)
    assert not agg.in_window(date(2025, 12, 13), window)
    assert not agg.in_window(date(2025, 12, 21), window)


def test_breakdown_counts_by_doctor_department():
    doctors = [Doctor(id="D-1", name="A", specialization="x", department="Cardiology"),
               Doctor(id="D-2", name="B", specialization="y")]
    appts = [appt("A-1", TODAY), appt("A-2", TODAY, doctor="D-2"), appt("A-3", TODAY, doctor="D-9")]
    source, counts = agg.department_breakdown(appts, doctors)
    assert source == "appointments"
    assert counts == {"Cardiology": 1, "Unknown": 2}


def test_breakdown_falls_back_to_doctor_counts():
    doctors = [Doctor(id="D-1", name="A", specialization="x", department="Cardiology"),
               Doctor(id="D-2", name="B", specialization="y", department="Cardiology"),
               Doctor(id="D-3", name="C", specialization="z", department="ER")]
    assert agg.department_breakdown([], doctors) == ("doctors", {"Cardiology": 2, "ER": 1})
    assert agg.department_breakdown([], doctors, doctors[2:]) == ("doctors", {"ER": 1})


def test_utilization_ignores_cancelled_and_handles_missing_template():
    doctors = [Doctor(id="D-1", name="A", specialization="x"), Doctor(id="D-2", name="B", specialization="y")]
    appts = [appt("A-1", TODAY), appt("A-2", TODAY, time="11:00", status=AppointmentStatus.CANCELLED),
             appt("A-3", TODAY, doctor="D-2")]
    rows = agg.utilization(doctors, {"D-1": ["10:00", "11:00", "12:00", "13:00"]}, appts, TODAY)
    first = rows[0]["days"][0]
    assert (first["filled"], first["total"], first["pct"]) == (1, 4, 25)
    assert len(rows[0]["days"]) == 7
    assert rows[1]["days"][0]["pct"] == 100


def test_overview_from_seed(store):
    out = DashboardService(store).overview("today", today=TODAY)
    assert out.kpis.patients_under_care == 2
    assert out.kpis.doctors_on_duty == 2
    assert out.kpis.nurses_assigned == 2
    assert out.kpis.appointments_today == 2
    assert out.departments.source == "appointments"
    assert {d.name: d.value for d in out.departments.departments} == {"Dermatology": 1, "Neurology": 1}
    assert out.patient_status["In Treatment"] == 1
    assert out.queues.waitlist == 0


def test_overview_empty_window_uses_doctors(store):
    out = DashboardService(store).overview("custom", start=date(2024, 1, 1), end=date(2024, 1, 31), today=TODAY)
    assert out.appointments == []
    assert out.departments.source == "doctors"
    filtered = DashboardService(store).overview(
        "custom", start=date(2024, 1, 1), end=date(2024, 1, 31), specialization="derm", today=TODAY)
    assert {d.name: d.value for d in filtered.departments.departments} == {"Dermatology": 1}
    assert [d.id for d in filtered.doctors] == ["D-001"]


def test_overview_alerts(store):
    AppointmentService(store).change_status("A-001", AppointmentStatusChange(status=AppointmentStatus.CANCELLED))
    out = DashboardService(store).overview("7d", day=date(2025, 12, 20), today=TODAY)
    assert [a.id for a in out.alerts.cancelled_in_window] == ["A-001"]
    assert {a.id for a in out.alerts.visits_on_day} == {"A-001", "A-002"}


def test_utilization_covers_every_doctor_when_filtered(store):
    out = DashboardService(store).overview("7d", specialization="derm", today=TODAY)
    assert [d.id for d in out.doctors] == ["D-001"]
    assert [row.doctor_id for row in out.utilization] == ["D-001", "D-002"]

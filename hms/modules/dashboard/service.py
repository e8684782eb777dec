import logging
from datetime import date
from hms.modules.dashboard import aggregation as agg
from hms.modules.dashboard.schemas import (
    Alerts, DashboardOut, DepartmentBreakdown, DepartmentCount, Kpis, Queues, UtilizationRow,
)
from hms.modules.doctors.service import filter_doctors
from hms.modules.transfers.models import TransferStatus
from hms.store.entity_store import EntityStore

log = logging.getLogger(__name__)

class DashboardService:
    def __init__(self, store: EntityStore):
        self.store = store

    def overview(self, timeframe: agg.Timeframe = "7d", start: date | None = None, end: date | None = None,
                 day: date | None = None, specialization: str | None = None, city: str | None = None,
                 today: date | None = None) -> DashboardOut:
        today = today or date.today()
        day = day or today
        window = agg.resolve_window(timeframe, today, start, end)

        appointments = self.store.appointments.all()
        doctors = self.store.doctors.all()
        patients = self.store.patients.all()
        nurses = self.store.nurses.all()
        filtering = bool(specialization or city)
        shown_doctors = filter_doctors(doctors, specialization, city) if filtering else doctors

        in_window = agg.appointments_in_window(appointments, window)
        source, counts = agg.department_breakdown(in_window, doctors, shown_doctors if filtering else None)
        alerts = agg.alerts(appointments, in_window, day)
        log.debug(f"Dashboard {timeframe} window={window}: {len(in_window)} appointment(s), breakdown by {source}")

        return DashboardOut(
            timeframe=timeframe,
            start=window[0],
            end=window[1],
            kpis=Kpis(**agg.kpis(patients, doctors, nurses, appointments, today)),
            departments=DepartmentBreakdown(
                source=source,
                departments=[DepartmentCount(name=k, value=v) for k, v in counts.items()],
            ),
            appointments=in_window,
            patient_status=agg.patient_status_counts(patients),
            alerts=Alerts(day=day, **alerts),
            queues=Queues(
                waitlist=len(self.store.waitlist),
                transfers_open=self.store.transfers.count(lambda t: t.status != TransferStatus.APPROVED),
            ),
            utilization=[UtilizationRow(**row) for row in agg.utilization(
                doctors, self.store.slot_templates.all(), appointments, today)],
            doctors=shown_doctors,
        )

from datetime import date
from fastapi import APIRouter, Depends
from hms.core.security import require_scopes
from hms.modules.dashboard.aggregation import Timeframe
from hms.modules.dashboard.schemas import DashboardOut
from hms.modules.dashboard.service import DashboardService
from hms.store.entity_store import EntityStore
from hms.store.provider import get_store

router = APIRouter()

def svc(store: EntityStore = Depends(get_store)) -> DashboardService: return DashboardService(store)

@router.get("", response_model=DashboardOut, dependencies=[Depends(require_scopes("dashboard:read"))])
async def dashboard(timeframe: Timeframe = "7d", start: date | None = None, end: date | None = None,
                    day: date | None = None, specialization: str | None = None, city: str | None = None,
                    service: DashboardService = Depends(svc)):
    return service.overview(timeframe, start, end, day, specialization, city)

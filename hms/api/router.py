from fastapi import APIRouter
from hms.modules.patients.router import router as patients_router
from hms.modules.doctors.router import router as doctors_router
from hms.modules.nurses.router import router as nurses_router
from hms.modules.appointments.router import router as appointments_router
from hms.modules.availability.router import router as availability_router
from hms.modules.waitlist.router import router as waitlist_router
from hms.modules.transfers.router import router as transfers_router
from hms.modules.community.router import router as community_router
from hms.modules.notifications.router import router as notifications_router
from hms.modules.dashboard.router import router as dashboard_router
from hms.modules.identity.router import router as identity_router

api_router = APIRouter()
api_router.include_router(patients_router, prefix="/patients", tags=["patients"])
api_router.include_router(doctors_router, prefix="/doctors", tags=["doctors"])
api_router.include_router(nurses_router, prefix="/nurses", tags=["nurses"])
api_router.include_router(appointments_router, prefix="/appointments", tags=["appointments"])
api_router.include_router(availability_router, tags=["availability"])
api_router.include_router(waitlist_router, prefix="/waitlist", tags=["waitlist"])
api_router.include_router(transfers_router, prefix="/transfers", tags=["transfers"])
api_router.include_router(community_router, prefix="/posts", tags=["community"])
api_router.include_router(notifications_router, prefix="/notifications", tags=["notifications"])
api_router.include_router(dashboard_router, prefix="/dashboard", tags=["dashboard"])
api_router.include_router(identity_router, tags=["identity"])

@api_router.get("/health", tags=["health"])
async def health():
    return {"status": "ok"}

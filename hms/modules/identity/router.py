from fastapi import APIRouter, Depends
from hms.core.security import Principal, get_principal

router = APIRouter()

@router.get("/me", response_model=Principal)
async def me(principal: Principal = Depends(get_principal)):
    """The caller as seen by the service: identity claims plus effective capabilities."""
    return principal

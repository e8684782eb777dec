import importlib
import pytest


@pytest.mark.parametrize("module", [
    "hms.main",
    "hms.api.router",
    "hms.modules.waitlist.service",
    "hms.modules.appointments.service",
    "hms.modules.dashboard.service",
])
def test_modules_import(module):
    assert importlib.import_module(module) is not None


def test_every_module_router_is_mounted():
    from hms.core.config import settings
    from hms.main import app

    paths = {route.path for route in app.routes}
    for prefix in ("/patients", "/doctors", "/nurses", "/appointments", "/availability/slots", "/waitlist",
                   "/transfers", "/posts", "/notifications", "/dashboard", "/me", "/health"):
        assert f"{settings.API_PREFIX}{prefix}" in paths

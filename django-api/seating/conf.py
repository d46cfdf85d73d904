"""App settings, overridable through the SEATING dict in Django settings."""

from typing import Any

from django.conf import settings

DEFAULTS: dict[str, Any] = {
    "DEFAULT_TIME_UNIT_MINUTES": 30,
    "SEAT_TYPE_CACHE_TIMEOUT": 300,
}


def get_setting(name: str) -> Any:
    """Return a SEATING setting, falling back to the app default."""
    overrides = getattr(settings, "SEATING", {})
    if name in overrides:
        return overrides[name]
    return DEFAULTS[name]

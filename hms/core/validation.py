import re
from hms.core.exceptions import ValidationFailed

_PHONE = re.compile(r"^\d{9,12}$")

def require_text(value: str | None, label: str) -> str:
    if value is None or not value.strip():
        raise ValidationFailed(f"{label} is required.")
    return value.strip()

def optional_text(value: str | None) -> str | None:
    if value is None:
        return None
    value = value.strip()
    return value or None

def check_phone(value: str | None) -> str | None:
    value = optional_text(value)
    if value is not None and not _PHONE.match(value):
        raise ValidationFailed("Phone must be 9-12 digits.")
    return value

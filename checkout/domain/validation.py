from typing import Any, Dict, Mapping, Optional

from checkout.domain import rules
from checkout.domain.schemas import CleanOrder, ValidationResult

_STRING_FIELDS = ("name", "email", "phone", "address1", "address2", "city", "state", "country", "pin")


class OrderValidationError(Exception):
    """Raised when a submission breaks one or more field rules."""

    def __init__(self, errors: Dict[str, str]):
        super().__init__(", ".join(sorted(errors)))
        self.errors = errors


def _clean_str(value: Any) -> str:
    if value is None:
        return ""
    return str(value).strip()


def coerce_qty(value: Any) -> Optional[int]:
    """
    Absent or blank quantities default to 1.
    Integral numbers and numeric strings ("2", "2.0") become int; anything else is None.
    """
    if value is None:
        return 1
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if value.is_integer() else None
    text = str(value).strip()
    if not text:
        return 1
    try:
        return int(text)
    except ValueError:
        pass
    try:
        number = float(text)
    except ValueError:
        return None
    # inf and nan are not integral
    return int(number) if number.is_integer() else None


def sanitize(raw: Mapping[str, Any]) -> CleanOrder:
    raw = raw or {}
    clean = {field: _clean_str(raw.get(field)) for field in _STRING_FIELDS}
    clean["email"] = clean["email"].lower()
    clean["qty"] = coerce_qty(raw.get("qty"))
    return CleanOrder(**clean)


def validate_order(clean: CleanOrder) -> Dict[str, str]:
    """Check every rule and return the failing fields only. Never stops at the first failure."""
    checks = {
        "name": bool(clean.name),
        "email": rules.is_valid_email(clean.email),
        "phone": rules.is_valid_phone(clean.phone),
        "address1": len(clean.address1) >= rules.ADDRESS1_MIN_LENGTH,
        "city": bool(clean.city),
        "state": bool(clean.state),
        "country": bool(clean.country),
        "pin": rules.is_valid_pin(clean.pin, clean.country),
        "qty": rules.is_valid_qty(clean.qty),
    }
    return {field: rules.MESSAGES[field] for field, ok in checks.items() if not ok}


def validate_fields(raw: Mapping[str, Any]) -> ValidationResult:
    """Form-side view: every field is reported, passing ones with an empty message."""
    failing = validate_order(sanitize(raw))
    errors = {field: failing.get(field, "") for field in rules.MESSAGES}
    return ValidationResult(ok=not failing, errors=errors)

"""
Canonical validation rules for the checkout form.

The browser form and the order endpoint classify input with this one table.
Patterns are written in the subset shared by Python ``re`` and ECMAScript so
``as_dict()`` can be served to the page unchanged.
"""
import re

EMAIL_PATTERN = r"^[^\s@]+@[^\s@]+\.[^\s@]+$"
PHONE_PATTERN = r"^\+?[0-9 ()-]{7,15}$"

# Country code -> (pattern, case-insensitive?)
POSTAL_PATTERNS = {
    "IN": (r"^\d{6}$", False),
    "US": (r"^\d{5}(-\d{4})?$", False),
    "GB": (r"^[A-Z]{1,2}\d[A-Z\d]? ?\d[A-Z]{2}$", True),
    "CA": (r"^[ABCEGHJ-NPRSTVXY]\d[ABCEGHJ-NPRSTV-Z] ?\d[ABCEGHJ-NPRSTV-Z]\d$", True),
    "AU": (r"^\d{4}$", False),
    "SG": (r"^\d{6}$", False),
}

ADDRESS1_MIN_LENGTH = 4
POSTAL_FALLBACK_MIN_LENGTH = 3
QTY_MIN = 1
QTY_MAX = 10

# Field order matches the form; validation reports in this order.
FIELDS = ("name", "email", "phone", "address1", "address2", "city", "state", "country", "pin", "qty")

MESSAGES = {
    "name": "Please enter your name",
    "email": "Enter a valid email",
    "phone": "Enter a valid phone",
    "address1": "Enter address line 1",
    "city": "Enter city",
    "state": "Enter state/province",
    "country": "Select country",
    "pin": "Enter a valid postal code",
    "qty": f"Quantity {QTY_MIN}–{QTY_MAX}",
}

_EMAIL_RE = re.compile(EMAIL_PATTERN)
_PHONE_RE = re.compile(PHONE_PATTERN)
_POSTAL_RES = {
    country: re.compile(pattern, re.ASCII | (re.IGNORECASE if ignore_case else 0))
    for country, (pattern, ignore_case) in POSTAL_PATTERNS.items()
}


def is_valid_email(value: str) -> bool:
    return bool(_EMAIL_RE.fullmatch(value or ""))


def is_valid_phone(value: str) -> bool:
    return bool(_PHONE_RE.fullmatch((value or "").strip()))


def is_valid_pin(pin: str, country: str) -> bool:
    """Postal code check for ``country``; unknown countries only need 3+ characters."""
    p = str(pin or "").strip()
    rule = _POSTAL_RES.get(str(country or "").strip().upper())
    if rule is None:
        return len(p) >= POSTAL_FALLBACK_MIN_LENGTH
    return bool(rule.fullmatch(p))


def is_valid_qty(qty) -> bool:
    # bool is an int subclass; True must not pass as 1
    if isinstance(qty, bool) or not isinstance(qty, int):
        return False
    return QTY_MIN <= qty <= QTY_MAX


def as_dict(unit_price_cents: int) -> dict:
    """JSON-ready export of the rule table, consumed by the landing page script."""
    return {
        "email": {"pattern": EMAIL_PATTERN, "flags": ""},
        "phone": {"pattern": PHONE_PATTERN, "flags": ""},
        "postal": {
            country: {"pattern": pattern, "flags": "i" if ignore_case else ""}
            for country, (pattern, ignore_case) in POSTAL_PATTERNS.items()
        },
        "postal_fallback_min_length": POSTAL_FALLBACK_MIN_LENGTH,
        "address1_min_length": ADDRESS1_MIN_LENGTH,
        "qty": {"min": QTY_MIN, "max": QTY_MAX},
        "required": ["name", "city", "state", "country"],
        "messages": dict(MESSAGES),
        "unit_price_cents": unit_price_cents,
    }

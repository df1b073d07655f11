"""
Headless model of the checkout modal.

Mirrors what the landing page does in the browser: open/close the modal,
keep the total in step with the quantity, run the shared rules before
submitting, and POST the order to the intake endpoint.
"""
import logging
import re
from typing import Any, Dict, Optional

import httpx
from pydantic import BaseModel

from checkout.domain import rules
from checkout.domain.schemas import Receipt, ValidationResult
from checkout.domain.validation import coerce_qty, validate_fields

logger = logging.getLogger(__name__)

FIRST_FIELD = "name"
HOME_ANCHOR = "#home"
SUBMIT_FAILED = "We couldn't place your order. Please try again."

_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")


def format_price(cents: int) -> str:
    """14900 -> "$149", 1490050 -> "$14,900.50"."""
    if cents % 100 == 0:
        return f"${cents // 100:,}"
    return f"${cents / 100:,.2f}"


def parse_qty(value: Any) -> int:
    """Read a quantity the way the number input does, clamped to the allowed range."""
    m = _LEADING_INT.match(str(value if value is not None else ""))
    n = int(m.group(1)) if m else rules.QTY_MIN
    return max(rules.QTY_MIN, min(rules.QTY_MAX, n))


class SubmitOutcome(BaseModel):
    ok: bool
    status_code: Optional[int] = None
    errors: Dict[str, str] = {}
    receipt: Optional[Receipt] = None


class CheckoutForm:
    def __init__(self, http_client: httpx.Client, unit_price_cents: int = 14900,
                 endpoint: str = "/api/orders"):
        self.http = http_client
        self.unit_price_cents = unit_price_cents
        self.endpoint = endpoint

        self.is_open = False
        self.aria_hidden = True
        self.scroll_locked = False
        self.focused_field: Optional[str] = None
        self.location_hash = ""
        self.last_receipt: Optional[Receipt] = None
        self.form_error = ""

        self.fields: Dict[str, str] = {}
        self.errors: Dict[str, str] = {}
        self.total_text = ""
        self.reset()

    # --- Modal ---

    def open_modal(self):
        self.is_open = True
        self.aria_hidden = False
        self.scroll_locked = True
        self.focused_field = FIRST_FIELD

    def close_modal(self):
        self.is_open = False
        self.aria_hidden = True
        self.scroll_locked = False
        self.focused_field = None

    # --- Fields ---

    def reset(self):
        self.fields = {field: "" for field in rules.FIELDS}
        self.errors = {field: "" for field in rules.MESSAGES}
        self.form_error = ""
        self.update_total(1)

    def update_total(self, qty: Any = None) -> int:
        n = parse_qty(self.fields.get("qty") if qty is None else qty)
        self.fields["qty"] = str(n)
        self.total_text = format_price(n * self.unit_price_cents)
        return n

    def set_field(self, name: str, value: Any):
        if name not in self.fields:
            raise KeyError(f"unknown form field: {name}")
        if name == "qty":
            self.update_total(value)
            return
        self.fields[name] = "" if value is None else str(value)
        # Postal code is re-checked live whenever it or the country changes
        if name in ("pin", "country"):
            ok = rules.is_valid_pin(self.fields["pin"], self.fields["country"])
            self.errors["pin"] = "" if ok else rules.MESSAGES["pin"]

    def validate(self) -> ValidationResult:
        result = validate_fields(self.fields)
        self.errors = dict(result.errors)
        return result

    # --- Submission ---

    def submit(self) -> SubmitOutcome:
        self.form_error = ""
        result = self.validate()
        if not result.ok:
            return SubmitOutcome(ok=False, errors=result.failing())

        payload = {field: self.fields[field] for field in rules.FIELDS}
        payload["qty"] = coerce_qty(self.fields["qty"])

        try:
            resp = self.http.post(self.endpoint, json=payload)
        except httpx.HTTPError as e:
            logger.warning(f"Order submission failed: {e}")
            self.form_error = SUBMIT_FAILED
            return SubmitOutcome(ok=False)

        if resp.status_code in (200, 422):
            try:
                body = resp.json()
                if resp.status_code == 200:
                    receipt = Receipt(id=body["id"], created_at=body["created_at"], total_cents=body["total_cents"])
                else:
                    server_errors = dict(body["errors"])
            except (ValueError, KeyError, TypeError) as e:
                # pydantic's ValidationError is a ValueError too
                logger.warning(f"Unreadable HTTP {resp.status_code} response to order submission: {e}")
                self.form_error = SUBMIT_FAILED
                return SubmitOutcome(ok=False, status_code=resp.status_code)

        if resp.status_code == 200:
            self._complete(receipt)
            return SubmitOutcome(ok=True, status_code=200, receipt=receipt)

        if resp.status_code == 422:
            self.errors = {field: server_errors.get(field, "") for field in rules.MESSAGES}
            # Errors not tied to a form field (e.g. a malformed body)
            if any(field not in rules.MESSAGES for field in server_errors):
                self.form_error = SUBMIT_FAILED
            return SubmitOutcome(ok=False, status_code=422, errors=server_errors)

        logger.warning(f"Order submission rejected with HTTP {resp.status_code}")
        self.form_error = SUBMIT_FAILED
        return SubmitOutcome(ok=False, status_code=resp.status_code)

    def _complete(self, receipt: Receipt):
        self.last_receipt = receipt
        self.close_modal()
        self.reset()
        self.location_hash = HOME_ANCHOR

from fastapi import APIRouter, Request
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse
import logging

from checkout.domain import rules
from checkout.domain.schemas import OrderSubmission
from checkout.domain.validation import OrderValidationError

router = APIRouter(prefix="/api")
logger = logging.getLogger(__name__)


def client_ip(request: Request) -> str:
    """First X-Forwarded-For entry, else the peer address, else empty."""
    forwarded = request.headers.get("x-forwarded-for", "")
    first = forwarded.split(",")[0].strip()
    if first:
        return first
    return request.client.host if request.client else ""


@router.post("/orders", tags=["orders"])
def create_order(request: Request, payload: OrderSubmission):
    """
    Validate and store one checkout order.
    Retrieves the intake service from app.state (Dependency Injection).
    """
    service = request.app.state.order_service
    try:
        receipt = service.create_order(
            payload.model_dump(),
            user_agent=request.headers.get("user-agent", ""),
            ip=client_ip(request),
        )
    except OrderValidationError as e:
        return JSONResponse(status_code=422, content={"ok": False, "errors": e.errors})
    except Exception as e:
        logger.error(f"❌ Order insert failed: {e}", exc_info=True)
        return JSONResponse(status_code=500, content={"ok": False, "error": "Server error"})

    return {"ok": True, **jsonable_encoder(receipt)}


@router.get("/health/db", tags=["meta"])
def db_health(request: Request):
    try:
        info = request.app.state.order_service.check_health()
    except Exception as e:
        logger.error(f"❌ DB health check failed: {e}", exc_info=True)
        return JSONResponse(status_code=500, content={"ok": False, "error": "Database unavailable"})
    return {"ok": True, **jsonable_encoder(info)}


@router.get("/rules", tags=["meta"])
def validation_rules(request: Request):
    """The same rule table the server validates with, for the landing page script."""
    return rules.as_dict(request.app.state.order_service.unit_price_cents)

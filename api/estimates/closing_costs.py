"""Closing cost estimate endpoint.

POST a deal record as JSON to get its breakdown back, or GET
``?property_id=...`` to recompute the breakdown for a stored deal.
"""

import json
import asyncio
from pydantic import ValidationError

from src.models.deal import DealRecord
from src.services.closing_costs import compute_closing_costs
from src.services.contract_notices import estimate_closing_costs
from src.services.fee_schedule import get_fee_schedule
from src.utils.errors import DealDeskError, NotFoundError
from src.utils.logging import (
    correlation_context,
    correlation_id_from_headers,
    mask_sensitive_data,
    setup_logging,
)
from src.utils.logging_config import LoggingConfig

logger = setup_logging(__name__)


def _response(status_code: int, body: dict, correlation_id: str) -> dict:
    return {
        "statusCode": status_code,
        "headers": {
            "Content-Type": "application/json",
            LoggingConfig.LOG_CORRELATION_ID_HEADER: correlation_id,
        },
        "body": json.dumps(body),
    }


def _parse_body(raw_body) -> dict:
    if isinstance(raw_body, dict):
        return raw_body
    try:
        body = json.loads(raw_body) if raw_body else {}
    except json.JSONDecodeError:
        body = {}
    return body if isinstance(body, dict) else {}


def handler(request):
    """Compute or recompute a seller closing cost breakdown."""
    with correlation_context(correlation_id_from_headers(request.get("headers"))) as correlation_id:
        try:
            method = (request.get("method") or "POST").upper()

            if method == "GET":
                query_params = request.get("query", {}) or {}
                property_id = query_params.get("property_id")
                if not property_id:
                    return _response(400, {"error": "property_id is required"}, correlation_id)
                breakdown = asyncio.run(estimate_closing_costs(property_id))
            else:
                # An unreadable body is an empty deal: the estimate still renders
                deal = DealRecord.model_validate(_parse_body(request.get("body")))
                breakdown = compute_closing_costs(deal, get_fee_schedule())

            return _response(200, {
                "ok": True,
                "breakdown": breakdown.model_dump(mode="json"),
                "title_fees_total": breakdown.title_fees_total,
            }, correlation_id)

        except ValidationError as e:
            return _response(400, {"error": "Invalid deal record", "details": str(e)}, correlation_id)
        except NotFoundError as e:
            return _response(404, {"error": str(e)}, correlation_id)
        except DealDeskError as e:
            logger.error(mask_sensitive_data(f"Error computing closing costs: {e}"), exc_info=True)
            return _response(500, {"error": str(e)}, correlation_id)
        except Exception as e:
            logger.error(mask_sensitive_data(f"Unexpected error computing closing costs: {e}"), exc_info=True)
            return _response(500, {"error": str(e)}, correlation_id)

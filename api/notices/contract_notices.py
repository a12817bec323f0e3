"""Contract notices endpoint.

GET returns overdue and upcoming notices across all properties in contract
(or one property with ``?property_id=...``). POST marks a notice complete.
"""

import json
import asyncio

from src.services.contract_notices import (
    get_contract_notices,
    get_property_notices,
    mark_notice_complete,
)
from src.utils.errors import DealDeskError, NoticeError, NotFoundError
from src.utils.logging import (
    correlation_context,
    correlation_id_from_headers,
    mask_sensitive_data,
    setup_logging,
)
from src.utils.logging_config import LoggingConfig
from src.utils.numbers import coerce_flag

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


def _summary_body(summary) -> dict:
    def rows(items):
        return [
            {**item.model_dump(mode="json"), "badge": item.badge}
            for item in items
        ]

    return {
        "ok": True,
        "overdue": rows(summary.overdue),
        "upcoming": rows(summary.upcoming),
        "count": summary.count,
    }


def handler(request):
    """List or update contract notices."""
    with correlation_context(correlation_id_from_headers(request.get("headers"))) as correlation_id:
        try:
            method = (request.get("method") or "GET").upper()

            if method == "POST":
                raw_body = request.get("body")
                try:
                    body = json.loads(raw_body) if isinstance(raw_body, str) and raw_body else (raw_body or {})
                except json.JSONDecodeError:
                    return _response(400, {"error": "Invalid JSON body"}, correlation_id)
                if not isinstance(body, dict):
                    return _response(400, {"error": "Invalid JSON body"}, correlation_id)

                property_id = body.get("property_id")
                notice_type = body.get("notice_type")
                if not property_id or not notice_type:
                    return _response(400, {"error": "property_id and notice_type are required"}, correlation_id)

                status = asyncio.run(mark_notice_complete(
                    str(property_id),
                    notice_type,
                    coerce_flag(body.get("completed"), default=True),
                ))
                return _response(200, {"ok": True, "status": status.model_dump(mode="json")}, correlation_id)

            query_params = request.get("query", {}) or {}
            property_id = query_params.get("property_id")
            if property_id:
                summary = asyncio.run(get_property_notices(property_id))
            else:
                summary = asyncio.run(get_contract_notices())
            return _response(200, _summary_body(summary), correlation_id)

        except NoticeError as e:
            return _response(400, {"error": str(e)}, correlation_id)
        except NotFoundError as e:
            return _response(404, {"error": str(e)}, correlation_id)
        except DealDeskError as e:
            logger.error(mask_sensitive_data(f"Error processing contract notices: {e}"), exc_info=True)
            return _response(500, {"error": str(e)}, correlation_id)
        except Exception as e:
            logger.error(mask_sensitive_data(f"Unexpected error processing contract notices: {e}"), exc_info=True)
            return _response(500, {"error": str(e)}, correlation_id)

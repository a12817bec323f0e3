"""Overdue notice deadline check endpoint (can be called via Vercel cron)."""

import json
import asyncio

from src.services.contract_notices import check_notice_deadlines
from src.utils.errors import DealDeskError
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


def handler(request):
    """
    Check every property in contract for overdue notices.

    Can be called manually or via Vercel cron job.
    """
    with correlation_context(correlation_id_from_headers(request.get("headers"))) as correlation_id:
        try:
            sweep = asyncio.run(check_notice_deadlines())

            return _response(200, {
                "ok": True,
                **sweep.model_dump(mode="json"),
            }, correlation_id)

        except DealDeskError as e:
            logger.error(mask_sensitive_data(f"Error checking notice deadlines: {e}"), exc_info=True)
            return _response(500, {"error": str(e)}, correlation_id)
        except Exception as e:
            logger.error(mask_sensitive_data(f"Unexpected error checking notice deadlines: {e}"), exc_info=True)
            return _response(500, {"error": str(e)}, correlation_id)

"""Supabase client wrapper with async context manager support."""

import os
import logging
from datetime import datetime, timezone
from typing import Iterable, Optional
from supabase import create_client, Client
from supabase.client import ClientOptions

from src.models.deal import DealRecord, PropertyScheduleRecord
from src.models.notice import NoticeStatus
from src.utils.errors import SupabaseError

logger = logging.getLogger(__name__)

DEALS_TABLE = os.environ.get("DEALS_TABLE", "estimated_net_properties")
NOTICE_STATUS_TABLE = os.environ.get("NOTICE_STATUS_TABLE", "property_notice_status")

SCHEDULE_COLUMNS = (
    "id, agent_id, name, street_address, in_contract, closing_date, inspection_days, "
    "loan_app_time_frame, loan_commitment, deposit_collection"
)

# Global client instance (singleton pattern)
_client: Optional[Client] = None


def get_supabase_client() -> Client:
    """Get or create Supabase client singleton."""
    global _client

    if _client is None:
        url = os.environ.get("SUPABASE_URL")
        key = os.environ.get("SUPABASE_SERVICE_ROLE_KEY")

        if not url or not key:
            raise SupabaseError("SUPABASE_URL and SUPABASE_SERVICE_ROLE_KEY must be set")

        options = ClientOptions(
            auto_refresh_token=False,
            persist_session=False,
        )

        _client = create_client(url, key, options)
        logger.info("Supabase client initialized", extra={"url": url})

    return _client


class SupabaseClient:
    """Async context manager for Supabase client."""

    def __init__(self):
        self.client: Optional[Client] = None

    async def __aenter__(self) -> Client:
        self.client = get_supabase_client()
        return self.client

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        if exc_type:
            logger.error(
                "Supabase operation error",
                extra={"error": str(exc_val), "type": exc_type.__name__}
            )
        return False


# Deal records (estimated net properties)
async def get_deal_record(property_id: str) -> Optional[DealRecord]:
    """Get the full deal record for a property."""
    async with SupabaseClient() as client:
        try:
            result = client.table(DEALS_TABLE).select("*").eq("id", property_id).execute()
        except Exception as e:
            raise SupabaseError(f"Failed to get deal record: {e}")
    return DealRecord.model_validate(result.data[0]) if result.data else None


async def get_property_schedule(property_id: str) -> Optional[PropertyScheduleRecord]:
    """Get the schedule fields for a property."""
    async with SupabaseClient() as client:
        try:
            result = client.table(DEALS_TABLE).select(SCHEDULE_COLUMNS).eq("id", property_id).execute()
        except Exception as e:
            raise SupabaseError(f"Failed to get property schedule: {e}")
    return PropertyScheduleRecord.model_validate(result.data[0]) if result.data else None


async def list_contract_properties() -> list[PropertyScheduleRecord]:
    """List schedule records for every property that has gone under contract."""
    async with SupabaseClient() as client:
        try:
            result = client.table(DEALS_TABLE).select(SCHEDULE_COLUMNS).not_.is_("in_contract", "null").execute()
        except Exception as e:
            raise SupabaseError(f"Failed to list contract properties: {e}")
    return [PropertyScheduleRecord.model_validate(row) for row in (result.data or [])]


# Notice statuses
async def list_notice_statuses(property_ids: Iterable[str]) -> list[NoticeStatus]:
    """List notice statuses for a set of properties."""
    ids = list(property_ids)
    if not ids:
        return []

    async with SupabaseClient() as client:
        try:
            result = (
                client.table(NOTICE_STATUS_TABLE)
                .select("property_id, notice_type, completed, completed_at")
                .in_("property_id", ids)
                .execute()
            )
        except Exception as e:
            raise SupabaseError(f"Failed to list notice statuses: {e}")
    return [NoticeStatus.model_validate(row) for row in (result.data or [])]


async def upsert_notice_status(property_id: str, notice_type: str, completed: bool) -> NoticeStatus:
    """Create or update the status for one (property, notice type) pair. Last write wins."""
    row = {
        "property_id": property_id,
        "notice_type": notice_type,
        "completed": completed,
        "completed_at": datetime.now(timezone.utc).isoformat() if completed else None,
    }
    async with SupabaseClient() as client:
        try:
            result = (
                client.table(NOTICE_STATUS_TABLE)
                .upsert(row, on_conflict="property_id,notice_type")
                .execute()
            )
        except Exception as e:
            raise SupabaseError(f"Failed to upsert notice status: {e}")
    if not result.data:
        raise SupabaseError(f"Failed to upsert notice status: no data returned for {property_id}")
    return NoticeStatus.model_validate(result.data[0])

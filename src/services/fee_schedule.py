"""Fee schedule configuration loader."""

import json
import os
from typing import Optional
from pydantic import ValidationError

from src.models.fee_schedule import FeeSchedule
from src.utils.errors import FeeScheduleError
from src.utils.logging import get_structured_logger

logger = get_structured_logger(__name__)

# Cached schedule instance (singleton pattern)
_fee_schedule: Optional[FeeSchedule] = None


def load_fee_schedule(path: Optional[str] = None) -> FeeSchedule:
    """
    Load a fee schedule from a JSON file.

    Uses ``path`` or the ``FEE_SCHEDULE_PATH`` environment variable. With
    neither set, the built-in default schedule is returned.
    """
    path = path or os.environ.get("FEE_SCHEDULE_PATH")
    if not path:
        logger.info("Using default fee schedule")
        return FeeSchedule()

    try:
        with open(path, encoding="utf-8") as fh:
            data = json.load(fh)
    except (OSError, json.JSONDecodeError) as e:
        raise FeeScheduleError(f"Failed to read fee schedule {path}: {e}")

    try:
        schedule = FeeSchedule.model_validate(data)
    except ValidationError as e:
        raise FeeScheduleError(f"Invalid fee schedule {path}: {e}")

    logger.info("Loaded fee schedule", path=path, fee_schedule=schedule.name)
    return schedule


def get_fee_schedule() -> FeeSchedule:
    """Get or load the configured fee schedule."""
    global _fee_schedule

    if _fee_schedule is None:
        _fee_schedule = load_fee_schedule()
    return _fee_schedule


def reset_fee_schedule() -> None:
    """Drop the cached schedule so the next call reloads configuration."""
    global _fee_schedule
    _fee_schedule = None

"""
Helpers for reading the status conditions of cluster objects
"""

# Standard
from datetime import datetime, timezone
from typing import List, Optional

# Third Party
import dateutil.parser

# First Party
import alog

log = alog.use_channel("CONDS")

DEFAULT_TIMESTAMP_KEY = "lastTransitionTime"
READY_CONDITION = "Ready"
COMPLETE_CONDITION = "Complete"
FAILED_CONDITION = "Failed"


def get_conditions(object_state: dict, type_val: str) -> List[dict]:
    """Get all conditions of a given type from an object state"""
    return [
        cond
        for cond in (object_state.get("status") or {}).get("conditions") or []
        if cond.get("type") == type_val
    ]


def latest_condition(
    object_state: dict,
    type_val: str,
    timestamp_key: str = DEFAULT_TIMESTAMP_KEY,
) -> Optional[dict]:
    """Get the most recent condition of the given type, or None if the object
    has no such condition
    """
    conditions = get_conditions(object_state, type_val)
    log.debug2("Found %d [%s] conditions", len(conditions), type_val)
    if not conditions:
        return None
    return max(conditions, key=lambda cond: _condition_timestamp(cond, timestamp_key))


def condition_is(
    object_state: dict,
    type_val: str,
    expected_status: bool,
    timestamp_key: str = DEFAULT_TIMESTAMP_KEY,
) -> bool:
    """Check that the latest condition of the given type has the expected
    status. A missing condition never matches.
    """
    condition = latest_condition(object_state, type_val, timestamp_key)
    if condition is None:
        return False
    log.debug3("Latest [%s] condition: %s", type_val, condition)
    obj_status = condition.get("status")
    if obj_status is None or obj_status == "":
        return False
    if isinstance(obj_status, str):
        return obj_status.lower() == str(expected_status).lower()
    return bool(obj_status) == expected_status


def condition_message(object_state: dict, type_val: str) -> str:
    """Get a human readable reason/message for the latest condition"""
    condition = latest_condition(object_state, type_val) or {}
    return ": ".join(
        part for part in (condition.get("reason"), condition.get("message")) if part
    )


def _condition_timestamp(condition: dict, timestamp_key: str) -> datetime:
    timestamp = condition.get(timestamp_key)
    if isinstance(timestamp, str):
        parsed = dateutil.parser.parse(timestamp)
    elif isinstance(timestamp, datetime):
        parsed = timestamp
    else:
        log.warning("Found condition with no valid timestamp. Using epoch")
        parsed = datetime.fromtimestamp(0, tz=timezone.utc)

    # Naive and aware timestamps can't be compared, so treat naive as UTC
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed

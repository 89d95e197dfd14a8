"""
Shared readiness rule for kinds that manage a number of replicas
"""

# Standard
from typing import Dict, Optional
import math

# First Party
import alog

# Local
from ..constants import DEFAULT_SUCCESS_FACTOR, SUCCESS_FACTOR_META_KEY
from ..exceptions import assert_config
from ..status import Readiness

log = alog.use_channel("RPLCS")


def success_factor(meta: Optional[Dict[str, str]]) -> int:
    """Parse the success_factor meta value, an integer percentage in [1, 100]"""
    raw = (meta or {}).get(SUCCESS_FACTOR_META_KEY)
    if raw is None:
        return DEFAULT_SUCCESS_FACTOR
    try:
        factor = int(str(raw).strip())
    except ValueError:
        factor = None
    assert_config(
        factor is not None and 0 < factor <= 100,
        f"{SUCCESS_FACTOR_META_KEY} must be an integer in [1, 100], got [{raw}]",
    )
    return factor


def replicas_readiness(
    key: str,
    desired: Optional[int],
    ready: Optional[int],
    meta: Optional[Dict[str, str]] = None,
) -> Readiness:
    """Compare the ready replica count with the share of desired replicas that
    the success_factor requires. An unset desired count means one replica.
    """
    desired = 1 if desired is None else desired
    ready = ready or 0
    required = math.ceil(desired * success_factor(meta) / 100)
    log.debug2("[%s] has %d/%d ready, needs %d", key, ready, desired, required)
    if ready >= required:
        return Readiness.READY
    return Readiness.NOT_READY

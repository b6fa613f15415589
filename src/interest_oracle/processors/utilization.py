from __future__ import annotations

import logging

from ..constants import BORROW_TOKEN_DENOMINATION, INTEREST_DENOMINATION
from ..domain import PoolSnapshot
from ..errors import MalformedInput
from ..units import checked_add, checked_mul

logger = logging.getLogger(__name__)


def compute_utilization(
    borrow_tokens_circulating: int,
    recorded_value: int,
    pool_assets: int,
) -> int:
    """Derive pool utilization from borrow tokens in circulation.

    Args:
        borrow_tokens_circulating: Borrow tokens held outside the pool
        recorded_value: Current register value, scaled by BORROW_TOKEN_DENOMINATION
        pool_assets: Pool currency still available in the pool

    Returns:
        Utilization scaled to [0, INTEREST_DENOMINATION]

    Both divisions truncate and the result is final: callers must not round
    it again. An empty pool with no borrows counts as unutilized.
    """
    if borrow_tokens_circulating < 0 or recorded_value < 0 or pool_assets < 0:
        raise MalformedInput(
            "Utilization inputs must be non-negative "
            f"(borrow_tokens={borrow_tokens_circulating}, value={recorded_value}, "
            f"pool_assets={pool_assets})"
        )

    borrowed = (
        checked_mul(borrow_tokens_circulating, recorded_value)
        // BORROW_TOKEN_DENOMINATION
    )
    total = checked_add(pool_assets, borrowed)
    if total == 0:
        return 0

    utilization = checked_mul(INTEREST_DENOMINATION, borrowed) // total
    logger.debug(
        "Utilization: borrowed=%d pool_assets=%d -> %d", borrowed, pool_assets, utilization
    )
    return utilization


def utilization_from_snapshot(pool: PoolSnapshot, recorded_value: int) -> int:
    return compute_utilization(
        pool.borrow_tokens_circulating, recorded_value, pool.pool_assets
    )

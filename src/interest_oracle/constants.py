"""Protocol constants shared with the Pool and Collateral components."""

from typing import Final

# Fixed point scale factors
BORROW_TOKEN_DENOMINATION: Final = 10**16
INTEREST_DENOMINATION: Final = 10**8
COEFFICIENT_DENOMINATION: Final = 10**8
RATE_DENOMINATION: Final = 10**6  # simple model, 100% = 10**6

# Heights
UPDATE_FREQUENCY: Final = 120  # blocks per compound period
BLOCKS_PER_YEAR: Final = 262_800
PERIODS_PER_YEAR: Final = BLOCKS_PER_YEAR // UPDATE_FREQUENCY

# Layout widths of the persisted record
MAX_UINT256: Final = 2**256 - 1
MAX_UINT64: Final = 2**64 - 1

COEFFICIENT_COUNT: Final = 6

DEFAULT_MAXIMUM_EXECUTION_FEE: Final = 1_000_000

# Per-period coefficients [a, b, c, d, e, f], scaled by COEFFICIENT_DENOMINATION.
# 913 per period is roughly 2% a year over PERIODS_PER_YEAR periods.
COEFFICIENT_PRESETS: Final[dict[str, tuple[int, int, int, int, int, int]]] = {
    "linear": (913, 4_566, 0, 0, 0, 0),
    "quadratic": (457, 2_283, 4_566, 0, 0, 0),
    "steep": (457, 1_370, 0, 0, 0, 13_699),
}
DEFAULT_COEFFICIENT_PRESET: Final = "linear"

from __future__ import annotations

from .constants import BORROW_TOKEN_DENOMINATION, MAX_UINT256
from .errors import OverflowRisk


def checked_add(a: int, b: int, limit: int = MAX_UINT256) -> int:
    """Add with overflow checking."""
    result = a + b
    if abs(result) > limit:
        raise OverflowRisk(f"Arithmetic overflow in addition: {a} + {b}")
    return result


def checked_mul(a: int, b: int, limit: int = MAX_UINT256) -> int:
    """Multiply with overflow checking."""
    result = a * b
    if abs(result) > limit:
        raise OverflowRisk(f"Arithmetic overflow in multiplication: {a} * {b}")
    return result


def checked_div(a: int, b: int) -> int:
    """Divide, truncating toward zero."""
    if b == 0:
        raise OverflowRisk("Division by zero")
    quotient = abs(a) // abs(b)
    return quotient if (a >= 0) == (b > 0) else -quotient


def to_debt_amount(borrow_token_amount: int, borrow_token_value: int) -> int:
    """Convert borrow tokens into the pool currency they are worth.

    Args:
        borrow_token_amount: Amount of borrow tokens.
        borrow_token_value: Register value of one borrow token, scaled by
            ``BORROW_TOKEN_DENOMINATION``.

    Returns:
        Debt in pool currency units, truncated.
    """
    return checked_mul(borrow_token_amount, borrow_token_value) // BORROW_TOKEN_DENOMINATION


def to_borrow_token_amount(currency_amount: int, borrow_token_value: int) -> int:
    """Convert a pool currency amount into borrow tokens at the register value.

    Raises:
        OverflowRisk: If ``borrow_token_value`` is zero.
    """
    if borrow_token_value <= 0:
        raise OverflowRisk("borrow_token_value must be positive")
    return (
        checked_mul(currency_amount, BORROW_TOKEN_DENOMINATION) // borrow_token_value
    )

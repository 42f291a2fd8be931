"""
Discount Service

Tiered discount calculation for accepted transactions.

Units:
- totalamount is in cents
- amount = totalamount // 100 selects the tier and is what the percentage
  is applied to (discount = amount * percent), while the prime bonus tests
  the unscaled totalamount. Kept as-is for compatibility with existing
  partners.
"""
from math import isqrt
from typing import List, Tuple

from pydantic import BaseModel

# (upper bound of amount, inclusive) -> base percent; above the last bound: 15
BASE_TIERS: List[Tuple[int, int]] = [
    (199, 0),
    (500, 5),
    (800, 7),
    (1200, 10),
]
TOP_TIER_PERCENT = 15

PRIME_BONUS_PERCENT = 8
PRIME_BONUS_MIN_AMOUNT = 500  # exclusive

TRAILING_FIVE_BONUS_PERCENT = 10
TRAILING_FIVE_MIN_AMOUNT = 900  # exclusive

MAX_DISCOUNT_PERCENT = 20


def is_prime(number: int) -> bool:
    """Deterministic trial-division primality test."""
    if number <= 1:
        return False
    if number == 2:
        return True
    if number % 2 == 0:
        return False

    for divisor in range(3, isqrt(number) + 1, 2):
        if number % divisor == 0:
            return False

    return True


class DiscountBreakdown(BaseModel):
    """How a discount was derived from a total amount."""
    totalamount: int
    amount: int
    base_percent: int
    prime_bonus_percent: int
    trailing_five_bonus_percent: int
    percent: int
    discount: int

    model_config = {"frozen": True}


def base_percent(amount: int) -> int:
    """Base tier percentage for a scaled amount."""
    for upper_bound, percent in BASE_TIERS:
        if amount <= upper_bound:
            return percent
    return TOP_TIER_PERCENT


def discount_breakdown(totalamount: int) -> DiscountBreakdown:
    """
    Compute the discount for a total amount, with its components.

    Rules:
    - Base tier by amount: <200: 0%, 200-500: 5%, 501-800: 7%,
      801-1200: 10%, >1200: 15%
    - +8% if amount > 500 and totalamount (unscaled) is prime
    - +10% if amount > 900 and amount ends in 5
    - Sum capped at 20%
    - discount = amount * percent
    """
    amount = totalamount // 100

    base = base_percent(amount)
    prime_bonus = (
        PRIME_BONUS_PERCENT
        if amount > PRIME_BONUS_MIN_AMOUNT and is_prime(totalamount)
        else 0
    )
    trailing_five_bonus = (
        TRAILING_FIVE_BONUS_PERCENT
        if amount > TRAILING_FIVE_MIN_AMOUNT and amount % 10 == 5
        else 0
    )

    percent = min(base + prime_bonus + trailing_five_bonus, MAX_DISCOUNT_PERCENT)

    return DiscountBreakdown(
        totalamount=totalamount,
        amount=amount,
        base_percent=base,
        prime_bonus_percent=prime_bonus,
        trailing_five_bonus_percent=trailing_five_bonus,
        percent=percent,
        discount=amount * percent,
    )


def calculate_discount(totalamount: int) -> int:
    """Discount for a non-negative total amount in cents."""
    return discount_breakdown(totalamount).discount

"""Budget → price tier mapping shared with place records."""

from __future__ import annotations

import math

PRICE_TIER_THRESHOLDS_YEN: tuple[int, ...] = (1000, 2000, 3000, 5000, 10000)


def infer_price_tier_from_budget(budget_yen: float | None) -> int | None:
    """Return the lowest price tier (1-based) whose threshold covers the budget.

    Budgets above the last threshold map to one tier past it.
    """

    if budget_yen is None or (isinstance(budget_yen, float) and not math.isfinite(budget_yen)):
        return None
    for index, threshold in enumerate(PRICE_TIER_THRESHOLDS_YEN):
        if budget_yen <= threshold:
            return index + 1
    return len(PRICE_TIER_THRESHOLDS_YEN) + 1

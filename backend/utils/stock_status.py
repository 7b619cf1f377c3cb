"""
Stock and freshness classification.

Pure functions over already-loaded records: nothing here touches the database,
so every read recomputes the derived state from the stored amounts and dates.
Records only need the attributes the functions read (ORM objects in the app,
simple stand-ins in tests).
"""

import enum
from datetime import date, datetime

# Policy constants
LOW_STOCK_THRESHOLD = 0.2  # < 20% of required_amount
EXPIRING_SOON_DAYS = 5


class StockStatus(str, enum.Enum):
    IN_STOCK = "in-stock"
    LOW_STOCK = "low-stock"
    OUT_OF_STOCK = "out-of-stock"
    UNKNOWN = "unknown"


class Freshness(str, enum.Enum):
    FRESH = "fresh"
    EXPIRING_SOON = "expiring-soon"
    EXPIRED = "expired"


def _as_date(value) -> date:
    if isinstance(value, datetime):
        return value.date()
    return value


def total_current_amount(ingredient, batches) -> float:
    """Sum of current_amount over the ingredient's batches that still hold stock."""
    return sum(
        b.current_amount
        for b in batches
        if b.ingredient_id == ingredient.id and b.current_amount > 0
    )


def stock_status(ingredient, batches) -> StockStatus:
    """
    Classify an ingredient's stock against its required amount.

    `batches` may contain batches of other ingredients; only the ones referencing
    `ingredient` are counted. A missing ingredient yields UNKNOWN.
    """
    if ingredient is None:
        return StockStatus.UNKNOWN

    total = total_current_amount(ingredient, batches)
    if total == 0:
        return StockStatus.OUT_OF_STOCK
    if total < ingredient.required_amount * LOW_STOCK_THRESHOLD:
        return StockStatus.LOW_STOCK
    return StockStatus.IN_STOCK


def days_until(expiration_date, today) -> int:
    """Whole days from today to the expiration date, time of day ignored."""
    return (_as_date(expiration_date) - _as_date(today)).days


def batch_freshness(batch, today) -> Freshness:
    days = days_until(batch.expiration_date, today)
    if days < 0:
        return Freshness.EXPIRED
    if days <= EXPIRING_SOON_DAYS:
        return Freshness.EXPIRING_SOON
    return Freshness.FRESH

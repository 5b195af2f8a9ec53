"""
utils/stock.py

Pure stock projection and expiry helpers.

On-hand quantity is never stored authoritatively; it is recomputed from
history:  on_hand = sum(purchase.quantity) - sum(bill_item.quantity),
regardless of whether the bill was paid in cash or on credit.

Do not import repos or open DB connections here.
"""
from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Any, Iterable, Mapping, Optional

from ..constants import NEAR_EXPIRY_DAYS, URGENT_EXPIRY_DAYS

__all__ = [
    "StockLevel",
    "NearExpiryItem",
    "on_hand_by_product",
    "project_stock",
    "days_until",
    "is_near_expiry",
    "sellable",
    "near_expiry",
]


@dataclass(frozen=True)
class StockLevel:
    id: int
    name: str
    purchase_price: float
    sale_price: float
    stock_entry_date: str | None
    expiry_date: str | None
    quantity: float


@dataclass(frozen=True)
class NearExpiryItem:
    level: StockLevel
    days_left: int
    urgent: bool


def _get(row: Mapping[str, Any] | Any, key: str):
    if isinstance(row, Mapping):
        return row[key]
    try:
        return row[key]
    except (TypeError, KeyError, IndexError):
        return getattr(row, key)


# -----------------------------
# Projection
# -----------------------------

def on_hand_by_product(purchases: Iterable, bill_items: Iterable) -> dict[int, float]:
    """
    Raw (unclamped) balance per product id.
    Rows may be dicts, sqlite3.Row or objects with product_id/quantity.
    """
    balance: dict[int, float] = {}
    for p in purchases:
        pid = int(_get(p, "product_id"))
        balance[pid] = balance.get(pid, 0) + (_get(p, "quantity") or 0)
    for bi in bill_items:
        pid = int(_get(bi, "product_id"))
        balance[pid] = balance.get(pid, 0) - (_get(bi, "quantity") or 0)
    return balance


def project_stock(products: Iterable, purchases: Iterable, bill_items: Iterable) -> list[StockLevel]:
    """
    Current stock for every product with a positive computed quantity,
    in the order the products were given. Negative balances (over-selling
    or edited history) are floored at zero and therefore drop out.
    """
    balance = on_hand_by_product(purchases, bill_items)
    levels: list[StockLevel] = []
    for p in products:
        pid = int(_get(p, "id"))
        qty = max(0, balance.get(pid, 0))
        if qty <= 0:
            continue
        levels.append(
            StockLevel(
                id=pid,
                name=_get(p, "name"),
                purchase_price=float(_get(p, "purchase_price") or 0.0),
                sale_price=float(_get(p, "sale_price") or 0.0),
                stock_entry_date=_get(p, "stock_entry_date"),
                expiry_date=_get(p, "expiry_date"),
                quantity=qty,
            )
        )
    return levels


# -----------------------------
# Expiry
# -----------------------------

def days_until(expiry_date: Optional[str], today: Optional[date] = None) -> Optional[int]:
    """Whole days from today to the expiry day (negative once expired); None without a date."""
    if not expiry_date:
        return None
    today = today or date.today()
    return (date.fromisoformat(str(expiry_date)[:10]) - today).days


def is_near_expiry(
    expiry_date: Optional[str],
    today: Optional[date] = None,
    window: int = NEAR_EXPIRY_DAYS,
) -> bool:
    days = days_until(expiry_date, today)
    return days is not None and 0 <= days <= window


def sellable(
    levels: Iterable[StockLevel],
    today: Optional[date] = None,
    window: int = NEAR_EXPIRY_DAYS,
) -> list[StockLevel]:
    """Stock the sale picker may offer: in stock and not near expiry."""
    return [lv for lv in levels if lv.quantity > 0 and not is_near_expiry(lv.expiry_date, today, window)]


def near_expiry(
    levels: Iterable[StockLevel],
    today: Optional[date] = None,
    window: int = NEAR_EXPIRY_DAYS,
    urgent_days: int = URGENT_EXPIRY_DAYS,
) -> list[NearExpiryItem]:
    """Near-expiry stock ranked by urgency (fewest days left first)."""
    items = []
    for lv in levels:
        if lv.quantity <= 0 or not is_near_expiry(lv.expiry_date, today, window):
            continue
        days = days_until(lv.expiry_date, today)
        items.append(NearExpiryItem(level=lv, days_left=days, urgent=days <= urgent_days))
    items.sort(key=lambda it: (it.days_left, it.level.name.lower()))
    return items

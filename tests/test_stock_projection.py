# tests/test_stock_projection.py
from datetime import date

from shop_inventory.utils.stock import (
    StockLevel,
    days_until,
    is_near_expiry,
    near_expiry,
    on_hand_by_product,
    project_stock,
    sellable,
)

TODAY = date(2025, 1, 1)


def _product(pid, name, expiry=None):
    return {
        "id": pid,
        "name": name,
        "purchase_price": 10.0,
        "sale_price": 15.0,
        "stock_entry_date": "2024-12-01",
        "expiry_date": expiry,
    }


def _level(pid, name, qty, expiry=None):
    return StockLevel(
        id=pid, name=name, purchase_price=10.0, sale_price=15.0,
        stock_entry_date="2024-12-01", expiry_date=expiry, quantity=qty,
    )


# ---------------------------------------------------------------------
# projection
# ---------------------------------------------------------------------

def test_on_hand_counts_purchases_minus_sales():
    purchases = [{"product_id": 1, "quantity": 10}, {"product_id": 1, "quantity": 5},
                 {"product_id": 2, "quantity": 3}]
    sold = [{"product_id": 1, "quantity": 4}, {"product_id": 2, "quantity": 5}]
    balance = on_hand_by_product(purchases, sold)
    assert balance == {1: 11, 2: -2}


def test_project_stock_drops_zero_and_negative_balances():
    products = [_product(1, "Tea"), _product(2, "Sugar"), _product(3, "Salt")]
    purchases = [{"product_id": 1, "quantity": 10}, {"product_id": 2, "quantity": 2}]
    sold = [{"product_id": 1, "quantity": 3}, {"product_id": 2, "quantity": 5}]

    levels = project_stock(products, purchases, sold)

    assert [(lv.id, lv.quantity) for lv in levels] == [(1, 7)]
    assert levels[0].name == "Tea"
    assert levels[0].sale_price == 15.0


def test_project_stock_ignores_history_of_unknown_products():
    """Purchases for a deleted product are in history but have no catalog row."""
    levels = project_stock([_product(1, "Tea")], [{"product_id": 99, "quantity": 4}], [])
    assert levels == []


def test_project_stock_keeps_product_order():
    products = [_product(2, "Beans"), _product(1, "Apples")]
    purchases = [{"product_id": 1, "quantity": 1}, {"product_id": 2, "quantity": 1}]
    assert [lv.id for lv in project_stock(products, purchases, [])] == [2, 1]


# ---------------------------------------------------------------------
# expiry
# ---------------------------------------------------------------------

def test_days_until():
    assert days_until("2025-01-06", TODAY) == 5
    assert days_until("2025-01-01", TODAY) == 0
    assert days_until("2024-12-31", TODAY) == -1
    assert days_until("2025-01-06 10:30:00", TODAY) == 5
    assert days_until(None, TODAY) is None
    assert days_until("", TODAY) is None


def test_near_expiry_window_bounds():
    assert is_near_expiry("2025-01-01", TODAY)          # today
    assert is_near_expiry("2025-01-31", TODAY)          # 30 days
    assert not is_near_expiry("2025-02-01", TODAY)      # 31 days
    assert not is_near_expiry("2024-12-31", TODAY)      # already expired
    assert not is_near_expiry(None, TODAY)


def test_near_expiry_ranks_by_days_and_flags_urgent():
    levels = [
        _level(1, "Five", 3, "2025-01-06"),
        _level(2, "Twenty", 3, "2025-01-21"),
        _level(3, "Forty", 3, "2025-02-10"),
        _level(4, "NoDate", 3, None),
        _level(5, "Expired", 3, "2024-12-20"),
        _level(6, "OutOfStock", 0, "2025-01-03"),
    ]

    items = near_expiry(levels, TODAY)

    assert [(it.level.name, it.days_left, it.urgent) for it in items] == [
        ("Five", 5, True),
        ("Twenty", 20, False),
    ]


def test_urgent_boundary_is_seven_days():
    items = near_expiry([_level(1, "A", 1, "2025-01-08"), _level(2, "B", 1, "2025-01-09")], TODAY)
    assert [(it.days_left, it.urgent) for it in items] == [(7, True), (8, False)]


def test_sellable_excludes_near_expiry_but_keeps_expired_and_undated():
    levels = [
        _level(1, "Five", 3, "2025-01-06"),
        _level(2, "Forty", 3, "2025-02-10"),
        _level(3, "NoDate", 3, None),
        _level(4, "Expired", 3, "2024-12-20"),
    ]
    assert [lv.name for lv in sellable(levels, TODAY)] == ["Forty", "NoDate", "Expired"]


def test_custom_window():
    levels = [_level(1, "Forty", 3, "2025-02-10")]
    assert sellable(levels, TODAY, window=60) == []
    assert [it.days_left for it in near_expiry(levels, TODAY, window=60)] == [40]

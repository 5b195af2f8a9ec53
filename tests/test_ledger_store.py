# tests/test_ledger_store.py
import sqlite3

import pytest

from shop_inventory.database.repositories import InsufficientStock


# ---------------------------------------------------------------------
# products
# ---------------------------------------------------------------------

def test_add_product_defaults_entry_date_to_today(store):
    pid = store.add_product("Tea")
    assert store.get_product_by_id(pid).stock_entry_date == "2025-01-01"


def test_update_product_through_store(store):
    pid = store.add_product("Tea", purchase_price=50, sale_price=75)
    store.update_product(pid, name="Green Tea", expiry_date="2025-06-01")
    p = store.get_product_by_id(pid)
    assert (p.name, p.sale_price, p.expiry_date) == ("Green Tea", 75, "2025-06-01")


# ---------------------------------------------------------------------
# stock projection through the store
# ---------------------------------------------------------------------

def test_quantity_cache_follows_every_stock_write(store):
    pid = store.add_product("Tea", sale_price=75)
    pur = store.add_purchase(pid, 10, 500, "2024-12-01")
    assert store.get_product_by_id(pid).quantity == 10

    store.create_bill("cash", 150, [{"product_id": pid, "quantity": 2, "unit_price": 75}])
    assert store.get_product_by_id(pid).quantity == 8

    store.update_purchase(pur, 6, 300, "2024-12-01")
    assert store.get_product_by_id(pid).quantity == 4

    store.delete_purchase(pur)
    assert store.get_product_by_id(pid).quantity == 0
    assert store.on_hand(pid) == 0


def test_product_writes_cannot_set_cached_quantity(store, stocked):
    rice = store.add_product("Rice", quantity=5)
    assert store.get_product_by_id(rice).quantity == store.on_hand(rice) == 0

    store.update_product(stocked["tea"], quantity=99)
    assert store.get_product_by_id(stocked["tea"]).quantity == store.on_hand(stocked["tea"]) == 10


def test_stock_with_quantity_lists_only_positive_stock(store, stocked):
    store.create_bill("cash", 300, [{"product_id": stocked["sugar"], "quantity": 5, "unit_price": 60}])
    levels = store.get_stock_with_quantity()
    assert [(lv.name, lv.quantity) for lv in levels] == [("Tea", 10)]


def test_sellable_and_near_expiry_split(store):
    soon = store.add_product("Milk", sale_price=20, expiry_date="2025-01-06")      # 5 days
    later = store.add_product("Cheese", sale_price=90, expiry_date="2025-01-21")   # 20 days
    far = store.add_product("Rice", sale_price=30, expiry_date="2025-02-10")       # 40 days
    undated = store.add_product("Salt", sale_price=10)
    for pid in (soon, later, far, undated):
        store.add_purchase(pid, 3, 30, "2024-12-20")

    assert {lv.id for lv in store.get_sellable_stock()} == {far, undated}
    near = store.get_near_expiry()
    assert [(it.level.id, it.days_left, it.urgent) for it in near] == [
        (soon, 5, True),
        (later, 20, False),
    ]


# ---------------------------------------------------------------------
# stock enforcement
# ---------------------------------------------------------------------

def test_enforcing_store_refuses_oversell_and_writes_nothing(enforcing_store):
    pid = enforcing_store.add_product("Sugar", sale_price=60)
    enforcing_store.add_purchase(pid, 5, 200, "2024-12-01")

    with pytest.raises(InsufficientStock) as exc:
        enforcing_store.create_bill("cash", 360, [{"product_id": pid, "quantity": 6, "unit_price": 60}])

    assert exc.value.product_id == pid
    assert exc.value.requested == 6
    assert exc.value.available == 5
    assert enforcing_store.get_bills() == []
    assert enforcing_store.on_hand(pid) == 5


def test_enforcement_sums_repeated_lines(enforcing_store):
    pid = enforcing_store.add_product("Sugar", sale_price=60)
    enforcing_store.add_purchase(pid, 5, 200, "2024-12-01")
    lines = [{"product_id": pid, "quantity": 3, "unit_price": 60}] * 2

    with pytest.raises(InsufficientStock):
        enforcing_store.create_bill("cash", 360, lines)


def test_enforcing_store_sells_exact_stock(enforcing_store):
    pid = enforcing_store.add_product("Sugar", sale_price=60)
    enforcing_store.add_purchase(pid, 5, 200, "2024-12-01")
    assert enforcing_store.create_bill("cash", 300, [{"product_id": pid, "quantity": 5, "unit_price": 60}])
    assert enforcing_store.on_hand(pid) == 0


# ---------------------------------------------------------------------
# intake
# ---------------------------------------------------------------------

def test_record_intake_creates_new_product(store):
    product_id, purchase_id = store.record_intake(
        "  Basmati Rice ", 3, 100, "2024-12-15", expiry_date="2025-12-15",
    )

    p = store.get_product_by_id(product_id)
    assert p.name == "Basmati Rice"
    assert p.purchase_price == pytest.approx(33.33)
    assert p.sale_price == pytest.approx(33.33)
    assert p.stock_entry_date == "2024-12-15"
    assert p.expiry_date == "2025-12-15"
    assert p.quantity == 3
    assert store.get_purchase_by_id(purchase_id)["product_id"] == product_id


def test_record_intake_reuses_product_by_name(store):
    first, _ = store.record_intake("Tea", 10, 500, "2024-12-01", sale_price=75)
    second, _ = store.record_intake("tea ", 4, 220, "2024-12-20", sale_price=80)

    assert second == first
    assert len(store.get_products()) == 1
    p = store.get_product_by_id(first)
    assert p.quantity == 14
    assert p.sale_price == 80
    assert p.purchase_price == 50  # unit cost is set only when the product is created


def test_failed_intake_leaves_no_new_product(store):
    with pytest.raises(sqlite3.IntegrityError):
        store.record_intake("Ghost", 3, 30, None)

    assert store.find_product_by_name("Ghost") is None
    assert store.get_products() == []
    assert store.get_purchases_count() == 0

# tests/test_products_repo.py
import pytest

from shop_inventory.constants import MISSING_PRODUCT_NAME
from shop_inventory.database.repositories import ProductsRepo


@pytest.fixture()
def repo(conn):
    return ProductsRepo(conn)


def test_create_and_get(repo):
    pid = repo.create("Tea", purchase_price=50, sale_price=75,
                      stock_entry_date="2025-01-01", expiry_date="2026-01-01")
    p = repo.get(pid)
    assert p is not None
    assert (p.name, p.quantity, p.purchase_price, p.sale_price) == ("Tea", 0, 50, 75)
    assert p.stock_entry_date == "2025-01-01"
    assert p.expiry_date == "2026-01-01"


def test_get_missing_returns_none(repo):
    assert repo.get(12345) is None


def test_list_products_sorted_by_name_case_insensitive(repo):
    repo.create("banana", stock_entry_date="2025-01-01")
    repo.create("Apple", stock_entry_date="2025-01-01")
    repo.create("cherry", stock_entry_date="2025-01-01")
    assert [p.name for p in repo.list_products()] == ["Apple", "banana", "cherry"]


def test_find_by_name_trims_and_ignores_case(repo):
    first = repo.create("Green Tea", stock_entry_date="2025-01-01")
    repo.create("green tea", stock_entry_date="2025-01-02")  # duplicates are allowed
    found = repo.find_by_name("  GREEN TEA ")
    assert found is not None and found.id == first
    assert repo.find_by_name("   ") is None
    assert repo.find_by_name("Coffee") is None


# ---------------------------------------------------------------------
# update merges only the supplied fields
# ---------------------------------------------------------------------

def test_update_merges_partial_changes(repo):
    pid = repo.create("Tea", purchase_price=50, sale_price=75,
                      stock_entry_date="2025-01-01", expiry_date="2026-01-01")

    repo.update(pid, sale_price=80)

    p = repo.get(pid)
    assert p.sale_price == 80
    assert (p.name, p.purchase_price, p.expiry_date) == ("Tea", 50, "2026-01-01")


def test_update_none_keeps_value_but_clears_expiry(repo):
    pid = repo.create("Tea", purchase_price=50, sale_price=75,
                      stock_entry_date="2025-01-01", expiry_date="2026-01-01")

    repo.update(pid, name=None, expiry_date=None)

    p = repo.get(pid)
    assert p.name == "Tea"
    assert p.expiry_date is None


def test_update_unknown_field_raises(repo):
    pid = repo.create("Tea", stock_entry_date="2025-01-01")
    with pytest.raises(TypeError):
        repo.update(pid, colour="green")


def test_update_missing_product_is_a_noop(repo):
    repo.update(999, name="Ghost")
    assert repo.list_products() == []


# ---------------------------------------------------------------------
# delete keeps history
# ---------------------------------------------------------------------

def test_delete_keeps_purchases_and_sales(store):
    pid = store.add_product("Tea", purchase_price=50, sale_price=75)
    store.add_purchase(pid, 10, 500, "2024-12-01")
    bill_id = store.create_bill("cash", 150, [
        {"product_id": pid, "quantity": 2, "unit_price": 75, "line_total": 150},
    ])

    store.delete_product(pid)

    assert store.get_product_by_id(pid) is None
    assert store.get_purchases_count() == 1
    assert store.get_purchases()[0]["product_name"] == MISSING_PRODUCT_NAME
    items = store.get_bill_items(bill_id)
    assert len(items) == 1
    assert items[0]["product_name"] == MISSING_PRODUCT_NAME


# ---------------------------------------------------------------------
# stock
# ---------------------------------------------------------------------

def test_on_hand_and_cache_sync(conn, repo):
    pid = repo.create("Tea", stock_entry_date="2025-01-01")
    conn.execute(
        "INSERT INTO purchases(product_id, quantity, total_value, purchase_date) VALUES (?, 10, 100, '2025-01-01')",
        (pid,),
    )
    conn.commit()
    assert repo.on_hand(pid) == 10
    assert repo.get(pid).quantity == 0  # cache not yet rewritten

    repo.sync_quantity_cache()

    assert repo.get(pid).quantity == 10
    assert [(lv.id, lv.quantity) for lv in repo.stock_levels()] == [(pid, 10)]


def test_list_from_purchases_only_returns_bought_products(store):
    bought = store.add_product("Tea")
    store.add_product("Never Bought")
    store.add_purchase(bought, 1, 10, "2025-01-01")
    assert [p.id for p in store.get_products_from_purchases()] == [bought]

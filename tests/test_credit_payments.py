# tests/test_credit_payments.py
import pytest


@pytest.fixture()
def credit_bill(store, stocked):
    """Credit bill of 200 with 50 paid up front."""
    return store.create_bill(
        "credit", 200,
        [{"product_id": stocked["tea"], "quantity": 2, "unit_price": 75},
         {"product_id": stocked["sugar"], "quantity": 1, "unit_price": 50}],
        amount_paid=50, customer_name="Ali",
    )


def test_full_payment_settles_the_bill(store, credit_bill):
    payment_id = store.add_credit_payment(credit_bill, 150)

    assert payment_id is not None
    bill = store.get_bill(credit_bill)
    assert (bill["amount_paid"], bill["credit_remaining"]) == (200, 0)
    assert store.get_bills_with_credit() == []


def test_partial_payments_accumulate_history(store, credit_bill):
    store.add_credit_payment(credit_bill, 40, payment_date="2025-01-02 10:00:00")
    store.add_credit_payment(credit_bill, 60, payment_date="2025-01-03 09:00:00")

    bill = store.get_bill(credit_bill)
    assert (bill["amount_paid"], bill["credit_remaining"]) == (150, 50)
    history = store.get_credit_payments(credit_bill)
    assert [(p["amount"], p["payment_date"]) for p in history] == [
        (40.0, "2025-01-02 10:00:00"),
        (60.0, "2025-01-03 09:00:00"),
    ]
    assert [b["id"] for b in store.get_bills_with_credit()] == [credit_bill]


def test_overpayment_clamps_remaining_to_zero(store, credit_bill):
    store.add_credit_payment(credit_bill, 500)
    bill = store.get_bill(credit_bill)
    assert bill["credit_remaining"] == 0
    assert bill["amount_paid"] == 550


@pytest.mark.parametrize("amount", [0, -10, "abc", None])
def test_non_positive_amount_is_rejected(store, credit_bill, amount):
    assert store.add_credit_payment(credit_bill, amount) is None
    assert store.get_credit_payments(credit_bill) == []
    assert store.get_bill(credit_bill)["credit_remaining"] == 150


def test_payment_on_unknown_bill_writes_nothing(store, conn):
    assert store.add_credit_payment(4242, 10) is None
    assert conn.execute("SELECT COUNT(*) FROM credit_payments").fetchone()[0] == 0


def test_outstanding_bills_oldest_first(store, stocked):
    line = [{"product_id": stocked["tea"], "quantity": 1, "unit_price": 75}]
    first = store.create_bill("credit", 75, line, amount_paid=0)
    second = store.create_bill("credit", 75, line, amount_paid=25)
    store.create_bill("cash", 75, line)

    outstanding = store.get_bills_with_credit()

    assert [b["id"] for b in outstanding] == [first, second]
    assert [b["credit_remaining"] for b in outstanding] == [75, 50]

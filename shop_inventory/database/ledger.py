# shop_inventory/database/ledger.py
"""
LedgerStore: the one object the UI talks to.

It owns a sqlite3 connection and the repositories built on it, and exposes
the shop's operations under stable names:

  Products   get_products, get_products_from_purchases, get_stock_with_quantity,
             get_sellable_stock, get_near_expiry, on_hand, add_product,
             update_product, delete_product, get_product_by_id, find_product_by_name
  Purchases  get_purchases, get_purchases_count, get_purchase_by_id, add_purchase,
             update_purchase, delete_purchase, record_intake
  Bills      create_bill, set_bill_printed, get_bills, get_bill, get_bill_items,
             get_sales_summary
  Credit     get_bills_with_credit, add_credit_payment, get_credit_payments

Stock is derived from purchases and bill items. After every write that can
move stock, products.quantity is rewritten from the projection so screens
that read the column see the same number.
"""
from __future__ import annotations

from datetime import date
import logging
import sqlite3
from typing import Callable, Iterable, Mapping, Optional

from ..constants import NEAR_EXPIRY_DAYS, PURCHASE_PAGE_SIZE, URGENT_EXPIRY_DAYS
from ..utils import stock as stock_utils
from .repositories import (
    BillDraft,
    BillItem,
    BillsRepo,
    CreditPaymentsRepo,
    Product,
    ProductsRepo,
    Purchase,
    PurchasesRepo,
)

_log = logging.getLogger(__name__)


def _as_item(item: BillItem | Mapping) -> BillItem:
    if isinstance(item, BillItem):
        return item
    return BillItem(
        product_id=int(item["product_id"]),
        quantity=item.get("quantity"),
        unit_price=item.get("unit_price"),
        line_total=item.get("line_total"),
    )


class LedgerStore:
    def __init__(
        self,
        conn: sqlite3.Connection,
        *,
        enforce_stock: bool = False,
        today: Optional[Callable[[], date]] = None,
    ):
        self.conn = conn
        self._today = today or date.today
        self.products = ProductsRepo(conn)
        self.purchases = PurchasesRepo(conn)
        self.bills = BillsRepo(conn, stock_lookup=self.on_hand, enforce_stock=enforce_stock)
        self.credit = CreditPaymentsRepo(conn)

    def today(self) -> date:
        return self._today()

    def _stock_changed(self) -> None:
        self.products.sync_quantity_cache()

    # ------------------------------------------------------------------
    # Products
    # ------------------------------------------------------------------
    def get_products(self) -> list[Product]:
        return self.products.list_products()

    def get_product_by_id(self, product_id: int) -> Product | None:
        return self.products.get(product_id)

    def find_product_by_name(self, name: str) -> Product | None:
        return self.products.find_by_name(name)

    def get_products_from_purchases(self) -> list[Product]:
        return self.products.list_from_purchases()

    def get_stock_with_quantity(self) -> list[stock_utils.StockLevel]:
        return self.products.stock_levels()

    def get_sellable_stock(self, window: int = NEAR_EXPIRY_DAYS) -> list[stock_utils.StockLevel]:
        return stock_utils.sellable(self.get_stock_with_quantity(), self.today(), window)

    def get_near_expiry(
        self,
        window: int = NEAR_EXPIRY_DAYS,
        urgent_days: int = URGENT_EXPIRY_DAYS,
    ) -> list[stock_utils.NearExpiryItem]:
        return stock_utils.near_expiry(self.get_stock_with_quantity(), self.today(), window, urgent_days)

    def on_hand(self, product_id: int) -> float:
        return self.products.on_hand(product_id)

    def add_product(
        self,
        name: str,
        quantity: int = 0,
        purchase_price: float = 0.0,
        sale_price: float = 0.0,
        stock_entry_date: str | None = None,
        expiry_date: str | None = None,
    ) -> int:
        pid = self.products.create(
            name,
            quantity=quantity,
            purchase_price=purchase_price,
            sale_price=sale_price,
            stock_entry_date=stock_entry_date or self.today().isoformat(),
            expiry_date=expiry_date,
        )
        self._stock_changed()
        return pid

    def update_product(self, product_id: int, **changes) -> None:
        self.products.update(product_id, **changes)
        self._stock_changed()

    def delete_product(self, product_id: int) -> None:
        self.products.delete(product_id)

    # ------------------------------------------------------------------
    # Purchases
    # ------------------------------------------------------------------
    def get_purchases(
        self,
        date: Optional[str] = None,
        limit: int = PURCHASE_PAGE_SIZE,
        offset: int = 0,
    ) -> list[dict]:
        return self.purchases.list_purchases(date=date, limit=limit, offset=offset)

    def get_purchases_count(self, date: Optional[str] = None) -> int:
        return self.purchases.count_purchases(date=date)

    def get_purchase_by_id(self, purchase_id: int) -> dict | None:
        return self.purchases.get(purchase_id)

    def add_purchase(
        self,
        product_id: int,
        quantity: int,
        total_value: float,
        purchase_date: str,
        expiry_date: str | None = None,
        sale_price: float | None = None,
    ) -> int:
        pid = self.purchases.create(
            Purchase(
                id=None,
                product_id=product_id,
                quantity=quantity,
                total_value=total_value,
                purchase_date=purchase_date,
                expiry_date=expiry_date,
                sale_price=sale_price,
            )
        )
        self._stock_changed()
        return pid

    def update_purchase(
        self,
        purchase_id: int,
        quantity: int,
        total_value: float,
        purchase_date: str,
        expiry_date: str | None = None,
        sale_price: float | None = None,
    ) -> None:
        self.purchases.update(
            Purchase(
                id=purchase_id,
                product_id=0,  # ignored; the stored product stays
                quantity=quantity,
                total_value=total_value,
                purchase_date=purchase_date,
                expiry_date=expiry_date,
                sale_price=sale_price,
            )
        )
        self._stock_changed()

    def delete_purchase(self, purchase_id: int) -> None:
        self.purchases.delete(purchase_id)
        self._stock_changed()

    def record_intake(
        self,
        name: str,
        quantity: int,
        total_value: float,
        purchase_date: str,
        expiry_date: str | None = None,
        sale_price: float | None = None,
    ) -> tuple[int, int]:
        """
        "Add New Item": reuse the product with the same (trimmed, case-insensitive)
        name or create it, then record the purchase. Both writes commit together.
        Returns (product_id, purchase_id).
        """
        product_id, purchase_id = self.purchases.record_intake(
            self.products,
            name,
            Purchase(
                id=None,
                product_id=0,  # resolved inside the transaction
                quantity=quantity,
                total_value=total_value,
                purchase_date=purchase_date,
                expiry_date=expiry_date,
                sale_price=sale_price,
            ),
        )
        self._stock_changed()
        return product_id, purchase_id

    # ------------------------------------------------------------------
    # Bills
    # ------------------------------------------------------------------
    def create_bill(
        self,
        payment_method: str,
        total: float,
        items: Iterable[BillItem | Mapping],
        amount_paid: float | None = None,
        credit_remaining: float | None = None,
        customer_name: str | None = None,
        customer_mobile: str | None = None,
    ) -> int | None:
        """
        Persist a sale. Returns the bill id or None when rejected.
        May raise InsufficientStock when the store enforces stock.
        """
        draft = BillDraft(
            payment_method=payment_method,
            total=total,
            items=[_as_item(it) for it in (items or [])],
            amount_paid=amount_paid,
            credit_remaining=credit_remaining,
            customer_name=customer_name,
            customer_mobile=customer_mobile,
        )
        bill_id = self.bills.create_bill(draft)
        if bill_id is not None:
            self._stock_changed()
        return bill_id

    def set_bill_printed(self, bill_id: int) -> None:
        self.bills.set_printed(bill_id)

    def get_bills(self, from_date: Optional[str] = None, to_date: Optional[str] = None) -> list[dict]:
        return self.bills.list_bills(from_date=from_date, to_date=to_date)

    def get_bill(self, bill_id: int) -> dict | None:
        return self.bills.get(bill_id)

    def get_bill_items(self, bill_id: int) -> list[dict]:
        return self.bills.list_items(bill_id)

    def get_sales_summary(
        self,
        from_date: Optional[str] = None,
        to_date: Optional[str] = None,
        date: Optional[str] = None,
    ) -> list[dict]:
        return self.bills.sales_summary(from_date=from_date, to_date=to_date, date=date)

    # ------------------------------------------------------------------
    # Credit
    # ------------------------------------------------------------------
    def get_bills_with_credit(self) -> list[dict]:
        return self.credit.list_outstanding_bills()

    def add_credit_payment(
        self,
        bill_id: int,
        amount: float,
        payment_date: Optional[str] = None,
    ) -> int | None:
        return self.credit.record_payment(bill_id, amount, payment_date)

    def get_credit_payments(self, bill_id: int) -> list[dict]:
        return self.credit.list_by_bill(bill_id)

# utils/helpers.py
import logging
from typing import Union, Optional

from ..constants import MISSING_PRODUCT_NAME

NumberLike = Union[float, int, str]

_log = logging.getLogger(__name__)


def fmt_date(value: Optional[str]) -> str:
    """Date part of an ISO date/timestamp, or the missing marker."""
    if not value:
        return MISSING_PRODUCT_NAME
    return str(value)[:10]


def fmt_money(v: NumberLike, places: int = 2, *, sentinel: Optional[str] = None) -> str:
    """
    Amount with thousands separators and fixed decimals. Values that do not
    parse come back as `sentinel` when given, else unchanged as text.
    """
    try:
        x = float(v)
    except (TypeError, ValueError):
        _log.debug("fmt_money: not a number: %r", v)
        return str(sentinel) if sentinel is not None else str(v)
    return f"{x:,.{places}f}"

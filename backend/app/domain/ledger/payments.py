"""
Payment normalization and ledger totals.

Pure functions: no I/O, no database access. Money is handled as Decimal,
quantized to cents with ROUND_HALF_UP, and handed back as float for storage.
"""

from datetime import date
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import Any, Dict, List, Mapping, Optional

CENT = Decimal("0.01")
ZERO = Decimal("0.00")

DEFAULT_MODE = "Cash"
DATE_FORMAT = "%d/%m/%Y"


def today_str(today: Optional[date] = None) -> str:
    """Day-first date string (DD/MM/YYYY) used whenever a date is omitted."""
    return (today or date.today()).strftime(DATE_FORMAT)


def to_money(value: Any) -> Decimal:
    """
    Coerce a loosely-typed value to a cent-quantized Decimal.

    None, booleans, empty or non-numeric strings, NaN and infinities all
    become 0. Numeric strings are parsed.
    """
    if value is None or isinstance(value, bool):
        return ZERO

    if isinstance(value, Decimal):
        amount = value
    elif isinstance(value, (int, float)):
        amount = Decimal(str(value))
    elif isinstance(value, str):
        text = value.strip()
        if not text:
            return ZERO
        try:
            amount = Decimal(text)
        except InvalidOperation:
            return ZERO
    else:
        return ZERO

    if not amount.is_finite():
        return ZERO
    try:
        return amount.quantize(CENT, rounding=ROUND_HALF_UP)
    except InvalidOperation:
        # Too many digits to represent at cent precision
        return ZERO


def _present(value: Any) -> bool:
    return value is not None and value != ""


def normalize_payment(raw: Any, today: Optional[date] = None) -> Dict[str, Any]:
    """Canonical payment record for one payment-like value."""
    data = raw if isinstance(raw, Mapping) else {}

    payment_date = data.get("date")
    mode = data.get("mode")

    return {
        "date": str(payment_date) if _present(payment_date) else today_str(today),
        "paid": float(to_money(data.get("paid"))),
        "expenditure": float(to_money(data.get("expenditure"))),
        "mode": str(mode) if _present(mode) else DEFAULT_MODE,
    }


def normalize_payments(raw_payments: Any, today: Optional[date] = None) -> List[Dict[str, Any]]:
    """
    Normalize a raw payment list.

    Anything that is not a list or tuple counts as an empty history. Output is
    one-to-one with input and keeps the input order.
    """
    if not isinstance(raw_payments, (list, tuple)):
        return []
    return [normalize_payment(item, today) for item in raw_payments]


def aggregate_totals(payments: List[Mapping[str, Any]], amount: Any) -> Dict[str, float]:
    """
    Derive the entry totals from its normalized payments.

    paid = sum of payment.paid
    expenditure = sum of payment.expenditure
    due = amount - paid
    balance = paid - expenditure
    """
    total_paid = sum((to_money(p.get("paid")) for p in payments), ZERO)
    total_expenditure = sum((to_money(p.get("expenditure")) for p in payments), ZERO)
    stated_amount = to_money(amount)

    return {
        "paid": float(total_paid),
        "expenditure": float(total_expenditure),
        "due": float(stated_amount - total_paid),
        "balance": float(total_paid - total_expenditure),
    }

"""Invoice totals calculator."""

from dataclasses import dataclass
from decimal import Decimal
from typing import Iterable

from backend.app.services.money import HUNDRED, ZERO, quantize, to_tax_rate


@dataclass(frozen=True)
class InvoiceTotals:
    subtotal: Decimal
    tax_amount: Decimal
    total: Decimal


def compute(line_items: Iterable, tax_rate_percent) -> InvoiceTotals:
    """Derive subtotal, tax and total from already-rounded line-item amounts.

    Pure and deterministic: identical inputs give identical Decimals.
    """
    rate = to_tax_rate(tax_rate_percent)
    subtotal = quantize(sum((Decimal(item.amount) for item in line_items), ZERO))
    tax_amount = quantize(subtotal * rate / HUNDRED)
    return InvoiceTotals(subtotal=subtotal, tax_amount=tax_amount, total=subtotal + tax_amount)

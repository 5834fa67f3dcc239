"""Ordered line-item collection for one invoice draft."""

from dataclasses import dataclass
from decimal import Decimal
from typing import Iterable, Iterator, List, Optional

from backend.app.core.errors import ValidationError
from backend.app.services.money import CENT, ZERO, quantize, to_money, to_quantity

# Largest gap allowed between a submitted amount and quantity * rate
AMOUNT_TOLERANCE = CENT


@dataclass(frozen=True)
class LineItemDraft:
    description: str
    quantity: Decimal
    rate: Decimal
    amount: Decimal


def derive_amount(quantity: Decimal, rate: Decimal) -> Decimal:
    return quantize(quantity * rate)


def _field_error(index: int, field: str, message: str) -> dict:
    return {"loc": ["lineItems", index, field], "msg": message}


def validate(items) -> None:
    """Reject an empty collection or any malformed item.

    Items only need ``description``, ``quantity`` and ``rate`` attributes, so
    both drafts and request payload rows can be checked.
    """
    items = list(items)
    if not items:
        raise ValidationError(
            "At least one line item is required",
            errors=[{"loc": ["lineItems"], "msg": "At least one line item is required"}],
        )
    errors = []
    for index, item in enumerate(items):
        if not (item.description or "").strip():
            errors.append(_field_error(index, "description", "Description is required"))
        if item.quantity is None or to_quantity(item.quantity) < CENT:
            errors.append(_field_error(index, "quantity", "Quantity must be at least 0.01"))
        if item.rate is None or Decimal(item.rate) < ZERO:
            errors.append(_field_error(index, "rate", "Rate cannot be negative"))
    if errors:
        first = errors[0]
        raise ValidationError(f"Line item {first['loc'][1] + 1}: {first['msg']}", errors=errors)


class LineItemCollection:
    """Insertion-ordered line items; list index is the display order."""

    def __init__(self, items: Optional[Iterable[LineItemDraft]] = None):
        self._items: List[LineItemDraft] = list(items or [])

    @classmethod
    def from_payload(cls, rows) -> "LineItemCollection":
        """Build drafts from submitted rows with the server as source of truth for ``amount``.

        A submitted amount is optional; when present it must agree with
        ``quantity * rate`` within one cent.
        """
        validate(rows)
        drafts = []
        errors = []
        for index, row in enumerate(rows):
            quantity = to_quantity(row.quantity, "quantity")
            rate = to_money(row.rate, "rate")
            amount = derive_amount(quantity, rate)
            submitted = getattr(row, "amount", None)
            if submitted is not None and abs(to_money(submitted) - amount) > AMOUNT_TOLERANCE:
                errors.append(
                    _field_error(index, "amount", f"Amount {to_money(submitted)} does not match quantity x rate ({amount})")
                )
            drafts.append(LineItemDraft(description=row.description.strip(), quantity=quantity, rate=rate, amount=amount))
        if errors:
            first = errors[0]
            raise ValidationError(f"Line item {first['loc'][1] + 1}: {first['msg']}", errors=errors)
        return cls(drafts)

    def insert(self, index: int, item: LineItemDraft) -> None:
        self._items.insert(index, item)

    def append(self, item: LineItemDraft) -> None:
        self._items.append(item)

    def remove_at(self, index: int) -> LineItemDraft:
        return self._items.pop(index)

    def validate(self) -> None:
        validate(self._items)

    def __iter__(self) -> Iterator[LineItemDraft]:
        return iter(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def __getitem__(self, index: int) -> LineItemDraft:
        return self._items[index]

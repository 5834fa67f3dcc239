"""Invoice status vocabulary and transition rules."""

from enum import Enum
from typing import Dict, FrozenSet

from backend.app.core.errors import InvalidStatusError


class InvoiceStatus(str, Enum):
    DRAFT = "draft"
    PENDING = "pending"
    PAID = "paid"
    OVERDUE = "overdue"
    CANCELLED = "cancelled"


# Creation never assigns DRAFT; it is only reachable through a status update.
INITIAL_STATUS = InvoiceStatus.PENDING

_ALL_STATUSES: FrozenSet[InvoiceStatus] = frozenset(InvoiceStatus)

# Every state may currently move to every state, PAID and CANCELLED included.
TRANSITIONS: Dict[InvoiceStatus, FrozenSet[InvoiceStatus]] = {status: _ALL_STATUSES for status in InvoiceStatus}


def parse_status(value) -> InvoiceStatus:
    if isinstance(value, InvoiceStatus):
        return value
    try:
        return InvoiceStatus(value)
    except ValueError as exc:
        allowed = ", ".join(status.value for status in InvoiceStatus)
        raise InvalidStatusError(
            f"Invalid status '{value}'. Expected one of: {allowed}",
            errors=[{"loc": ["status"], "msg": f"must be one of: {allowed}"}],
        ) from exc


def can_transition(current: InvoiceStatus, target: InvoiceStatus) -> bool:
    return target in TRANSITIONS.get(current, frozenset())


def validate_transition(current, requested) -> InvoiceStatus:
    """Return the requested status once it is known and allowed from ``current``."""
    target = parse_status(requested)
    source = parse_status(current)
    if not can_transition(source, target):
        raise InvalidStatusError(f"Cannot change status from '{source.value}' to '{target.value}'")
    return target

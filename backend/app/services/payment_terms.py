"""Payment terms tokens and due date derivation."""

from datetime import date, timedelta

from backend.app.core.errors import ValidationError

PAYMENT_TERMS_DAYS = {
    "due_on_receipt": 0,
    "net_15": 15,
    "net_30": 30,
    "net_60": 60,
}
DEFAULT_PAYMENT_TERMS = "net_30"


def validate_payment_terms(terms: str) -> str:
    if terms not in PAYMENT_TERMS_DAYS:
        allowed = ", ".join(PAYMENT_TERMS_DAYS)
        raise ValidationError(
            f"Invalid payment terms '{terms}'. Expected one of: {allowed}",
            errors=[{"loc": ["paymentTerms"], "msg": f"must be one of: {allowed}"}],
        )
    return terms


def due_date_for(terms: str, issue_date: date) -> date:
    # Unknown tokens fall back to net 30
    days = PAYMENT_TERMS_DAYS.get(terms, PAYMENT_TERMS_DAYS[DEFAULT_PAYMENT_TERMS])
    return issue_date + timedelta(days=days)

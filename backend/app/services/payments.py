"""Online payment initiation for invoices."""

from sqlalchemy.orm import Session

from backend.app.core.logging import get_logger
from backend.app.core.settings import get_settings
from backend.app.services.invoices import get_owned_invoice
from backend.app.services.money import to_cents
from backend.app.services.payment_gateway import PaymentGateway, PaymentIntent

logger = get_logger(__name__)


def create_payment_intent_for_invoice(db: Session, *, owner_id: int, invoice_id: int, gateway: PaymentGateway) -> PaymentIntent:
    invoice = get_owned_invoice(db, invoice_id, owner_id)
    amount_cents = to_cents(invoice.total)
    intent = gateway.create_payment_intent(
        amount_cents,
        get_settings().currency,
        {"invoiceId": str(invoice.id), "invoiceNumber": invoice.invoice_number},
    )
    logger.info("Payment intent created", invoice_id=invoice.id, amount_cents=amount_cents, intent_id=intent.intent_id)
    return intent

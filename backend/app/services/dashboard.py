"""Dashboard statistics for an owner's invoices."""

from decimal import Decimal

from sqlalchemy.orm import Session

from backend.app.models.invoice import Invoice
from backend.app.services.money import ZERO, quantize
from backend.app.services.status import InvoiceStatus


def get_dashboard_stats(db: Session, owner_id: int) -> dict:
    """Aggregate stored invoice totals; nothing is recomputed from line items."""
    invoices = db.query(Invoice.status, Invoice.total).filter(Invoice.owner_id == owner_id).all()

    pending = 0
    paid = 0
    revenue = ZERO
    for status, total in invoices:
        if status == InvoiceStatus.PENDING.value:
            pending += 1
        elif status == InvoiceStatus.PAID.value:
            paid += 1
            revenue += Decimal(total or 0)

    return {
        "invoices_issued": len(invoices),
        "pending_payment": pending,
        "paid": paid,
        "total_revenue": quantize(revenue),
    }

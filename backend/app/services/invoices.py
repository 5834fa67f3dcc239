"""Invoice lifecycle: create, update, status changes and delete.

This module is the only writer of Invoice and LineItem rows. Each operation
checks existence and ownership before touching anything, recomputes totals
from the submitted line items, and commits the invoice row together with its
line items in a single transaction.
"""

from datetime import date
from decimal import Decimal
from typing import List, Optional, Tuple

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from backend.app.core.errors import AuthorizationError, ConflictError, NotFoundError
from backend.app.core.logging import get_logger
from backend.app.core.settings import get_settings
from backend.app.core.time import utc_now
from backend.app.models.client import Client
from backend.app.models.invoice import Invoice
from backend.app.models.line_item import LineItem
from backend.app.services.clients import ensure_client_owned
from backend.app.services.line_items import LineItemCollection
from backend.app.services.money import to_tax_rate
from backend.app.services.numbering import InvoiceNumberGenerator, get_invoice_number_generator
from backend.app.services.payment_terms import due_date_for, validate_payment_terms
from backend.app.services.status import INITIAL_STATUS, parse_status, validate_transition
from backend.app.services.totals import compute

logger = get_logger(__name__)


def get_owned_invoice(db: Session, invoice_id: int, owner_id: int) -> Invoice:
    invoice = db.query(Invoice).filter(Invoice.id == invoice_id).first()
    if invoice is None:
        raise NotFoundError("Invoice not found")
    if invoice.owner_id != owner_id:
        raise AuthorizationError("Unauthorized access to this invoice")
    return invoice


def get_line_items(db: Session, invoice_id: int) -> List[LineItem]:
    return (
        db.query(LineItem)
        .filter(LineItem.invoice_id == invoice_id)
        .order_by(LineItem.position.asc(), LineItem.id.asc())
        .all()
    )


def _insert_line_items(db: Session, invoice_id: int, drafts: LineItemCollection) -> List[LineItem]:
    rows = [
        LineItem(
            invoice_id=invoice_id,
            position=position,
            description=draft.description,
            quantity=draft.quantity,
            rate=draft.rate,
            amount=draft.amount,
        )
        for position, draft in enumerate(drafts)
    ]
    db.add_all(rows)
    db.flush()
    return rows


def _invoice_number_taken(db: Session, invoice_number: str) -> bool:
    return db.query(Invoice.id).filter(Invoice.invoice_number == invoice_number).first() is not None


def _prepare(line_items, tax_rate, payment_terms: str, issue_date: date, due_date: Optional[date]):
    drafts = LineItemCollection.from_payload(line_items)
    rate = to_tax_rate(tax_rate)
    terms = validate_payment_terms(payment_terms)
    totals = compute(drafts, rate)
    return drafts, rate, terms, totals, due_date or due_date_for(terms, issue_date)


def create_invoice(
    db: Session,
    *,
    owner_id: int,
    client_id: int,
    invoice_number: Optional[str],
    issue_date: date,
    due_date: Optional[date],
    payment_terms: str,
    tax_rate: Decimal,
    notes: Optional[str],
    line_items,
    number_generator: Optional[InvoiceNumberGenerator] = None,
) -> Tuple[Invoice, List[LineItem]]:
    generator = number_generator or get_invoice_number_generator()
    drafts, rate, terms, totals, resolved_due_date = _prepare(line_items, tax_rate, payment_terms, issue_date, due_date)
    ensure_client_owned(db, client_id, owner_id)

    candidate = (invoice_number or "").strip() or generator.next()
    max_attempts = get_settings().invoice_number_max_attempts
    for _attempt in range(max_attempts):
        now = utc_now()
        invoice = Invoice(
            owner_id=owner_id,
            client_id=client_id,
            invoice_number=candidate,
            status=INITIAL_STATUS.value,
            issue_date=issue_date,
            due_date=resolved_due_date,
            payment_terms=terms,
            subtotal=totals.subtotal,
            tax_rate=rate,
            tax_amount=totals.tax_amount,
            total=totals.total,
            notes=notes or "",
            created_at=now,
            updated_at=now,
        )
        try:
            db.add(invoice)
            db.flush()
            rows = _insert_line_items(db, invoice.id, drafts)
            db.commit()
        except IntegrityError:
            db.rollback()
            if not _invoice_number_taken(db, candidate):
                raise
            generator.observe([candidate])
            logger.warning("Invoice number already in use, regenerating", invoice_number=candidate, owner_id=owner_id)
            candidate = generator.next()
            continue
        except SQLAlchemyError:
            db.rollback()
            logger.exception("Failed to create invoice", owner_id=owner_id, client_id=client_id)
            raise
        generator.observe([invoice.invoice_number])
        logger.info(
            "Invoice created",
            invoice_id=invoice.id,
            invoice_number=invoice.invoice_number,
            owner_id=owner_id,
            total=str(invoice.total),
        )
        return invoice, rows

    raise ConflictError(f"Could not allocate a unique invoice number after {max_attempts} attempts")


def update_invoice(
    db: Session,
    *,
    owner_id: int,
    invoice_id: int,
    client_id: int,
    issue_date: date,
    due_date: Optional[date],
    payment_terms: str,
    tax_rate: Decimal,
    notes: Optional[str],
    line_items,
) -> Tuple[Invoice, List[LineItem]]:
    """Replace the invoice's fields and its whole line-item set; status is left alone.

    There is no version check: the last update to commit wins.
    """
    invoice = get_owned_invoice(db, invoice_id, owner_id)
    ensure_client_owned(db, client_id, owner_id)
    drafts, rate, terms, totals, resolved_due_date = _prepare(line_items, tax_rate, payment_terms, issue_date, due_date)

    try:
        db.query(LineItem).filter(LineItem.invoice_id == invoice.id).delete(synchronize_session=False)
        invoice.client_id = client_id
        invoice.issue_date = issue_date
        invoice.due_date = resolved_due_date
        invoice.payment_terms = terms
        invoice.tax_rate = rate
        invoice.subtotal = totals.subtotal
        invoice.tax_amount = totals.tax_amount
        invoice.total = totals.total
        invoice.notes = notes or ""
        invoice.updated_at = utc_now()
        rows = _insert_line_items(db, invoice.id, drafts)
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Failed to update invoice", invoice_id=invoice_id, owner_id=owner_id)
        raise
    logger.info("Invoice updated", invoice_id=invoice.id, line_items=len(rows), total=str(invoice.total))
    return invoice, rows


def update_invoice_status(db: Session, *, owner_id: int, invoice_id: int, status: str) -> Invoice:
    invoice = get_owned_invoice(db, invoice_id, owner_id)
    target = validate_transition(invoice.status, status)
    previous = invoice.status
    try:
        invoice.status = target.value
        invoice.updated_at = utc_now()
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Failed to update invoice status", invoice_id=invoice_id)
        raise
    logger.info("Invoice status changed", invoice_id=invoice.id, previous=previous, status=target.value)
    return invoice


def delete_invoice(db: Session, *, owner_id: int, invoice_id: int) -> None:
    """Delete the line items, then the invoice, as one unit of work."""
    invoice = get_owned_invoice(db, invoice_id, owner_id)
    try:
        deleted_items = db.query(LineItem).filter(LineItem.invoice_id == invoice.id).delete(synchronize_session=False)
        db.delete(invoice)
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Failed to delete invoice", invoice_id=invoice_id)
        raise
    logger.info("Invoice deleted", invoice_id=invoice_id, line_items=deleted_items, owner_id=owner_id)


def list_invoices(db: Session, owner_id: int, status: Optional[str] = None) -> List[Tuple[Invoice, Optional[Client]]]:
    query = db.query(Invoice, Client).outerjoin(Client, Client.id == Invoice.client_id).filter(Invoice.owner_id == owner_id)
    if status:
        query = query.filter(Invoice.status == parse_status(status).value)
    return query.order_by(Invoice.created_at.desc(), Invoice.id.desc()).all()


def get_invoice_detail(db: Session, owner_id: int, invoice_id: int) -> Tuple[Invoice, Optional[Client], List[LineItem]]:
    invoice = get_owned_invoice(db, invoice_id, owner_id)
    client = db.query(Client).filter(Client.id == invoice.client_id).first()
    return invoice, client, get_line_items(db, invoice.id)

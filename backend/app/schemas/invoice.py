"""Invoice schemas."""

from datetime import date
from decimal import Decimal
from typing import List, Optional

from backend.app.schemas.client import ClientRead
from backend.app.schemas.common import CamelModel, Money, UtcDatetime
from backend.app.schemas.line_item import LineItemIn, LineItemRead
from backend.app.services.payment_terms import DEFAULT_PAYMENT_TERMS


class InvoiceForm(CamelModel):
    client_id: int
    invoice_number: Optional[str] = None
    issue_date: date
    due_date: Optional[date] = None
    payment_terms: str = DEFAULT_PAYMENT_TERMS
    tax_rate: Decimal = Decimal("0")
    notes: Optional[str] = None
    line_items: List[LineItemIn]


class InvoiceStatusUpdate(CamelModel):
    status: str


class InvoiceRead(CamelModel):
    id: int
    owner_id: int
    client_id: int
    invoice_number: str
    status: str
    issue_date: date
    due_date: date
    payment_terms: str
    subtotal: Money
    tax_rate: Money
    tax_amount: Money
    total: Money
    notes: Optional[str] = None
    created_at: UtcDatetime
    updated_at: UtcDatetime


class InvoiceWithClient(InvoiceRead):
    client: Optional[ClientRead] = None


class InvoiceWithLineItems(CamelModel):
    invoice: InvoiceRead
    line_items: List[LineItemRead]


class InvoiceDetail(InvoiceWithLineItems):
    client: Optional[ClientRead] = None


class NextInvoiceNumber(CamelModel):
    invoice_number: str

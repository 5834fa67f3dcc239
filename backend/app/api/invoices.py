"""Invoice routes."""

from typing import List

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session

from backend.app.db.session import get_db
from backend.app.dependencies.auth import get_current_user
from backend.app.models.user import User
from backend.app.schemas.client import ClientRead
from backend.app.schemas.invoice import (
    InvoiceDetail,
    InvoiceForm,
    InvoiceRead,
    InvoiceStatusUpdate,
    InvoiceWithClient,
    InvoiceWithLineItems,
    NextInvoiceNumber,
)
from backend.app.schemas.line_item import LineItemRead
from backend.app.services import invoices as invoice_service
from backend.app.services.invoice_export import build_invoice_csv, build_invoice_text, export_filename
from backend.app.services.numbering import InvoiceNumberGenerator, get_invoice_number_generator

router = APIRouter(prefix="/invoices", tags=["invoices"])


def _with_line_items(invoice, line_items) -> InvoiceWithLineItems:
    return InvoiceWithLineItems(
        invoice=InvoiceRead.model_validate(invoice),
        line_items=[LineItemRead.model_validate(item) for item in line_items],
    )


@router.get("", response_model=List[InvoiceWithClient])
async def list_invoices(
    status: str | None = None,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    rows = invoice_service.list_invoices(db, current_user.id, status=status)
    return [
        InvoiceWithClient(
            **InvoiceRead.model_validate(invoice).model_dump(),
            client=ClientRead.model_validate(client) if client else None,
        )
        for invoice, client in rows
    ]


@router.get("/next-number", response_model=NextInvoiceNumber)
async def next_invoice_number(
    current_user: User = Depends(get_current_user),
    generator: InvoiceNumberGenerator = Depends(get_invoice_number_generator),
):
    return NextInvoiceNumber(invoice_number=generator.next())


@router.get("/{invoice_id}", response_model=InvoiceDetail)
async def get_invoice(invoice_id: int, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    invoice, client, line_items = invoice_service.get_invoice_detail(db, current_user.id, invoice_id)
    return InvoiceDetail(
        invoice=InvoiceRead.model_validate(invoice),
        client=ClientRead.model_validate(client) if client else None,
        line_items=[LineItemRead.model_validate(item) for item in line_items],
    )


@router.post("", response_model=InvoiceWithLineItems, status_code=status.HTTP_201_CREATED)
async def create_invoice(
    payload: InvoiceForm,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
    generator: InvoiceNumberGenerator = Depends(get_invoice_number_generator),
):
    invoice, line_items = invoice_service.create_invoice(
        db,
        owner_id=current_user.id,
        client_id=payload.client_id,
        invoice_number=payload.invoice_number,
        issue_date=payload.issue_date,
        due_date=payload.due_date,
        payment_terms=payload.payment_terms,
        tax_rate=payload.tax_rate,
        notes=payload.notes,
        line_items=payload.line_items,
        number_generator=generator,
    )
    return _with_line_items(invoice, line_items)


@router.put("/{invoice_id}", response_model=InvoiceWithLineItems)
async def update_invoice(
    invoice_id: int,
    payload: InvoiceForm,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    invoice, line_items = invoice_service.update_invoice(
        db,
        owner_id=current_user.id,
        invoice_id=invoice_id,
        client_id=payload.client_id,
        issue_date=payload.issue_date,
        due_date=payload.due_date,
        payment_terms=payload.payment_terms,
        tax_rate=payload.tax_rate,
        notes=payload.notes,
        line_items=payload.line_items,
    )
    return _with_line_items(invoice, line_items)


@router.patch("/{invoice_id}/status", response_model=InvoiceRead)
async def update_invoice_status(
    invoice_id: int,
    payload: InvoiceStatusUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return invoice_service.update_invoice_status(db, owner_id=current_user.id, invoice_id=invoice_id, status=payload.status)


@router.delete("/{invoice_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_invoice(invoice_id: int, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    invoice_service.delete_invoice(db, owner_id=current_user.id, invoice_id=invoice_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/{invoice_id}/export.csv")
async def export_invoice_csv(invoice_id: int, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    invoice, client, line_items = invoice_service.get_invoice_detail(db, current_user.id, invoice_id)
    return Response(
        content=build_invoice_csv(invoice, client, line_items),
        media_type="text/csv; charset=utf-8",
        headers={"Content-Disposition": f'attachment; filename="{export_filename(invoice, "csv")}"'},
    )


@router.get("/{invoice_id}/export.txt")
async def export_invoice_text(invoice_id: int, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    invoice, client, line_items = invoice_service.get_invoice_detail(db, current_user.id, invoice_id)
    return Response(
        content=build_invoice_text(invoice, client, line_items),
        media_type="text/plain; charset=utf-8",
        headers={"Content-Disposition": f'attachment; filename="{export_filename(invoice, "txt")}"'},
    )

"""Render a finalized invoice as CSV or plain text for download."""

import csv
import io
from typing import Optional, Sequence

from backend.app.models.client import Client
from backend.app.models.invoice import Invoice
from backend.app.models.line_item import LineItem
from backend.app.services.money import format_money

CSV_HEADERS = [
    "Invoice Number",
    "Date",
    "Due Date",
    "Status",
    "Client Name",
    "Client Email",
    "Client Address",
    "Item Description",
    "Quantity",
    "Rate",
    "Amount",
    "Subtotal",
    "Tax Rate",
    "Tax Amount",
    "Total",
    "Notes",
]


def export_filename(invoice: Invoice, extension: str) -> str:
    return f"Invoice_{invoice.invoice_number}.{extension}"


def build_invoice_csv(invoice: Invoice, client: Optional[Client], line_items: Sequence[LineItem]) -> str:
    """One row per line item; invoice totals and notes only appear on the first row."""
    head = [
        invoice.invoice_number,
        invoice.issue_date.isoformat(),
        invoice.due_date.isoformat(),
        invoice.status,
        client.name if client else "",
        (client.email if client else None) or "",
        (client.address if client else None) or "",
    ]
    summary = [
        format_money(invoice.subtotal),
        format_money(invoice.tax_rate),
        format_money(invoice.tax_amount),
        format_money(invoice.total),
        invoice.notes or "",
    ]

    rows = []
    for index, item in enumerate(line_items):
        detail = [item.description, format_money(item.quantity), format_money(item.rate), format_money(item.amount)]
        rows.append(head + detail + (summary if index == 0 else [""] * len(summary)))
    if not rows:
        rows.append(head + ["", "", "", ""] + summary)

    buffer = io.StringIO()
    writer = csv.writer(buffer, quoting=csv.QUOTE_ALL, lineterminator="\n")
    writer.writerow(CSV_HEADERS)
    writer.writerows(rows)
    return buffer.getvalue()


def build_invoice_text(invoice: Invoice, client: Optional[Client], line_items: Sequence[LineItem]) -> str:
    lines = []
    lines.append(f"INVOICE {invoice.invoice_number}")
    lines.append(f"Status: {invoice.status}")
    lines.append(f"Issue date: {invoice.issue_date.isoformat()}")
    lines.append(f"Due date: {invoice.due_date.isoformat()} ({invoice.payment_terms})")
    lines.append("")
    lines.append("== Bill To ==")
    if client:
        lines.append(client.name)
        for value in (client.company_name, client.contact_person, client.address, client.email, client.phone):
            if value:
                lines.append(value)
    else:
        lines.append("N/A")
    lines.append("")
    lines.append("== Items ==")
    for item in line_items:
        lines.append(
            f"{item.description}: {format_money(item.quantity)} x {format_money(item.rate)} = {format_money(item.amount)}"
        )
    lines.append("")
    lines.append(f"Subtotal: {format_money(invoice.subtotal)}")
    lines.append(f"Tax ({format_money(invoice.tax_rate)}%): {format_money(invoice.tax_amount)}")
    lines.append(f"Total: {format_money(invoice.total)}")
    if invoice.notes:
        lines.append("")
        lines.append("== Notes ==")
        lines.append(invoice.notes)
    return "\n".join(lines) + "\n"

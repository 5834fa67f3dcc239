"""Sequential invoice number generator.

Numbers look like ``INV-2026-001``. The counter is process-wide, seeded from
the highest persisted number at startup, and only ever moves forward, so a
number handed out for a failed write leaves a gap instead of being reused.
"""

import re
import threading
from datetime import date
from typing import Callable, Iterable, Optional

from sqlalchemy.orm import Session

from backend.app.core.logging import get_logger
from backend.app.core.time import utc_today
from backend.app.models.invoice import Invoice

logger = get_logger(__name__)

INVOICE_NUMBER_PATTERN = re.compile(r"^INV-(\d{4})-(\d{3,})$")


def format_invoice_number(year: int, sequence: int) -> str:
    return f"INV-{year}-{sequence:03d}"


def parse_sequence(invoice_number: str) -> Optional[int]:
    match = INVOICE_NUMBER_PATTERN.match(invoice_number or "")
    if not match:
        return None
    return int(match.group(2))


class InvoiceNumberGenerator:
    def __init__(self, start: int = 1, today: Callable[[], date] = utc_today):
        self._next_sequence = start
        self._today = today
        self._lock = threading.Lock()

    def next(self) -> str:
        with self._lock:
            sequence = self._next_sequence
            self._next_sequence += 1
        return format_invoice_number(self._today().year, sequence)

    def observe(self, invoice_numbers: Iterable[str]) -> None:
        """Advance the counter past every well-formed number in ``invoice_numbers``."""
        highest = max((seq for seq in map(parse_sequence, invoice_numbers) if seq is not None), default=0)
        with self._lock:
            if highest >= self._next_sequence:
                self._next_sequence = highest + 1

    def seed_from_db(self, db: Session) -> None:
        numbers = [row[0] for row in db.query(Invoice.invoice_number).all()]
        self.observe(numbers)
        logger.info("Seeded invoice number generator", next_sequence=self._next_sequence, existing=len(numbers))


invoice_number_generator = InvoiceNumberGenerator()


def get_invoice_number_generator() -> InvoiceNumberGenerator:
    return invoice_number_generator

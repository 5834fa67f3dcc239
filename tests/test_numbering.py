import re
from concurrent.futures import ThreadPoolExecutor
from datetime import date

import pytest

from backend.app.db.base import Base
from backend.app.db.session import SessionLocal, engine
from backend.app.models.invoice import Invoice
from backend.app.models.user import User
from backend.app.services.numbering import InvoiceNumberGenerator, format_invoice_number, parse_sequence

NUMBER_FORMAT = re.compile(r"^INV-\d{4}-\d{3,}$")


@pytest.fixture(autouse=True)
def setup_db():
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


def test_format_pads_to_three_digits():
    assert format_invoice_number(2026, 1) == "INV-2026-001"
    assert format_invoice_number(2026, 42) == "INV-2026-042"
    assert format_invoice_number(2026, 1000) == "INV-2026-1000"


def test_parse_sequence():
    assert parse_sequence("INV-2025-007") == 7
    assert parse_sequence("INV-2025-1234") == 1234
    assert parse_sequence("custom-7") is None
    assert parse_sequence("") is None


def test_next_is_monotonic_and_uses_current_year():
    generator = InvoiceNumberGenerator(today=lambda: date(2026, 10, 16))
    assert [generator.next() for _ in range(3)] == ["INV-2026-001", "INV-2026-002", "INV-2026-003"]


def test_observe_only_moves_forward():
    generator = InvoiceNumberGenerator(today=lambda: date(2026, 1, 1))
    generator.observe(["INV-2025-041", "bogus", "INV-2026-007"])
    assert generator.next() == "INV-2026-042"
    generator.observe(["INV-2026-010"])
    assert generator.next() == "INV-2026-043"


def test_concurrent_callers_never_share_a_number():
    generator = InvoiceNumberGenerator()
    with ThreadPoolExecutor(max_workers=32) as pool:
        numbers = list(pool.map(lambda _: generator.next(), range(500)))
    assert len(set(numbers)) == 500
    assert all(NUMBER_FORMAT.match(number) for number in numbers)


def test_seed_from_db_continues_after_highest_number():
    db = SessionLocal()
    try:
        user = User(email="seed@example.com", hashed_password="x", is_active=True)
        db.add(user)
        db.commit()
        for number in ("INV-2025-003", "INV-2026-011", "imported-99"):
            db.add(
                Invoice(
                    owner_id=user.id,
                    client_id=1,
                    invoice_number=number,
                    status="pending",
                    issue_date=date(2026, 1, 1),
                    due_date=date(2026, 1, 31),
                    payment_terms="net_30",
                    subtotal=0,
                    tax_rate=0,
                    tax_amount=0,
                    total=0,
                )
            )
        db.commit()

        generator = InvoiceNumberGenerator(today=lambda: date(2026, 2, 1))
        generator.seed_from_db(db)
        assert generator.next() == "INV-2026-012"
    finally:
        db.close()

"""Clock helpers shared by models and invoice numbering."""

from datetime import UTC, date, datetime


def utc_now() -> datetime:
    """Timezone-aware UTC timestamp for created_at/updated_at columns."""
    return datetime.now(UTC)


def utc_today() -> date:
    """Calendar date in UTC; drives the year part of invoice numbers."""
    return utc_now().date()

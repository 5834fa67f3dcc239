"""Dashboard schemas."""

from backend.app.schemas.common import CamelModel, Money


class DashboardStats(CamelModel):
    invoices_issued: int
    pending_payment: int
    paid: int
    total_revenue: Money

"""Line item schemas."""

from decimal import Decimal
from typing import Optional

from backend.app.schemas.common import CamelModel, Money


class LineItemIn(CamelModel):
    description: str
    quantity: Decimal
    rate: Decimal
    amount: Optional[Decimal] = None


class LineItemRead(CamelModel):
    id: int
    invoice_id: int
    position: int
    description: str
    quantity: Money
    rate: Money
    amount: Money

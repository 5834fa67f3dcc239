"""Payment intent schemas."""

from typing import Optional

from backend.app.schemas.common import CamelModel


class PaymentIntentCreate(CamelModel):
    invoice_id: Optional[int] = None


class PaymentIntentRead(CamelModel):
    client_secret: str

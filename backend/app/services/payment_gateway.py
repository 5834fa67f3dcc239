"""Payment processor port and its adapters.

``FakeGateway`` keeps everything in-process for development and tests;
``StripeGateway`` creates real PaymentIntents through the Stripe SDK.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from uuid import uuid4

import stripe

from backend.app.core.errors import PaymentGatewayError
from backend.app.core.settings import get_settings


@dataclass(frozen=True)
class PaymentIntent:
    """Opaque reference returned by the processor."""

    intent_id: str
    client_secret: str


class PaymentGateway(ABC):
    @abstractmethod
    def create_payment_intent(self, amount_cents: int, currency: str, metadata: dict[str, str]) -> PaymentIntent:
        """Start a payment for ``amount_cents`` and return its client secret."""
        ...


class FakeGateway(PaymentGateway):
    def __init__(self) -> None:
        self.should_succeed: bool = True
        self.failure_reason: str = "Card declined"
        self.calls: list[dict] = []

    def configure(self, should_succeed: bool, failure_reason: str = "Card declined") -> None:
        self.should_succeed = should_succeed
        self.failure_reason = failure_reason

    def create_payment_intent(self, amount_cents: int, currency: str, metadata: dict[str, str]) -> PaymentIntent:
        self.calls.append({"amount": amount_cents, "currency": currency, "metadata": dict(metadata)})
        if not self.should_succeed:
            raise PaymentGatewayError(self.failure_reason)
        intent_id = f"pi_fake_{uuid4().hex[:16]}"
        return PaymentIntent(intent_id=intent_id, client_secret=f"{intent_id}_secret_{uuid4().hex[:12]}")


class StripeGateway(PaymentGateway):
    def __init__(self, api_key: str) -> None:
        self.client = stripe.StripeClient(api_key)

    def create_payment_intent(self, amount_cents: int, currency: str, metadata: dict[str, str]) -> PaymentIntent:
        try:
            intent = self.client.payment_intents.create(
                params={"amount": amount_cents, "currency": currency, "metadata": metadata}
            )
        except stripe.StripeError as exc:
            raise PaymentGatewayError() from exc
        return PaymentIntent(intent_id=intent.id, client_secret=intent.client_secret)


_gateway_instance = None


def get_payment_gateway() -> PaymentGateway:
    """Return the process-wide gateway selected by settings."""
    global _gateway_instance
    if _gateway_instance is None:
        settings = get_settings()
        if settings.payment_gateway == "stripe":
            if not settings.stripe_secret_key:
                raise RuntimeError("STRIPE_SECRET_KEY must be set when INVOICING_PAYMENT_GATEWAY=stripe")
            _gateway_instance = StripeGateway(settings.stripe_secret_key)
        else:
            _gateway_instance = FakeGateway()
    return _gateway_instance

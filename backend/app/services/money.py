"""Fixed-precision decimal helpers for amounts, quantities, rates and tax rates.

All derived money is quantized to two places with half-up rounding at the
point of computation; nothing passes through binary floats.
"""

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

from backend.app.core.errors import ValidationError

CENT = Decimal("0.01")
ZERO = Decimal("0.00")
HUNDRED = Decimal("100")


def to_decimal(value: Decimal | int | float | str | None, field: str = "value") -> Decimal:
    """Coerce a wire or storage value into a Decimal without float drift."""
    if value is None:
        raise ValidationError(f"{field} is required")
    if isinstance(value, Decimal):
        result = value
    elif isinstance(value, bool):
        raise ValidationError(f"{field} must be a number")
    else:
        try:
            result = Decimal(str(value).strip())
        except InvalidOperation as exc:
            raise ValidationError(f"{field} must be a number") from exc
    if not result.is_finite():
        raise ValidationError(f"{field} must be a finite number")
    return result


def quantize(value: Decimal) -> Decimal:
    return value.quantize(CENT, rounding=ROUND_HALF_UP)


def to_money(value, field: str = "amount") -> Decimal:
    return quantize(to_decimal(value, field))


def to_quantity(value, field: str = "quantity") -> Decimal:
    return quantize(to_decimal(value, field))


def to_tax_rate(value) -> Decimal:
    """Return the tax rate percentage at two places, enforcing ``0 <= rate <= 100``.

    The range is checked before rounding so ``100.004`` is rejected.
    """
    raw = to_decimal(value if value is not None else ZERO, "taxRate")
    if raw < ZERO or raw > HUNDRED:
        raise ValidationError("taxRate must be between 0 and 100")
    return quantize(raw)


def format_money(value: Decimal | None) -> str:
    """Render a stored amount as the canonical two-place decimal string."""
    if value is None:
        return "0.00"
    return str(quantize(Decimal(value)))


def to_cents(value: Decimal) -> int:
    return int((quantize(value) * HUNDRED).to_integral_value(rounding=ROUND_HALF_UP))

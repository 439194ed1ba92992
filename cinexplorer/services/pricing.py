from decimal import Decimal, ROUND_HALF_UP

CENT = Decimal("0.01")
HUNDRED = Decimal("100")


def _as_decimal(value) -> Decimal:
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def effective_unit_price(base_price, discount_percentage=None) -> Decimal:
    """Unit price after the ticket-type discount, rounded half-up to cents."""
    price = _as_decimal(base_price)
    if discount_percentage is None:
        return price.quantize(CENT, rounding=ROUND_HALF_UP)
    discount = _as_decimal(discount_percentage)
    if discount < 0 or discount > HUNDRED:
        raise ValueError("Discount percentage must be between 0 and 100")
    return (price * (1 - discount / HUNDRED)).quantize(CENT, rounding=ROUND_HALF_UP)


def total_price(base_price, quantity: int, discount_percentage=None) -> Decimal:
    if quantity <= 0:
        raise ValueError("Quantity must be positive")
    return effective_unit_price(base_price, discount_percentage) * quantity

import logging
from decimal import Decimal, InvalidOperation
from typing import Union

from delivery_pay.exceptions import InvalidShipmentError

Number = Union[int, float, str, Decimal]

# above this, cents no longer survive the float surcharge arithmetic
MAX_INPUT = Decimal("1e12")


def to_decimal(field: str, value: Number) -> Decimal:
    """
    Convert a numeric input to Decimal, rejecting negatives, non-numbers
    and values above MAX_INPUT.

    Floats go through str() so 1.1 becomes Decimal("1.1"), not its binary
    expansion.
    """
    if isinstance(value, bool):
        raise InvalidShipmentError(field, value)
    if isinstance(value, float):
        value = str(value)
    try:
        amount = Decimal(value)
    except (InvalidOperation, TypeError, ValueError):
        raise InvalidShipmentError(field, value) from None
    if not amount.is_finite() or amount < 0:
        raise InvalidShipmentError(field, value)
    if amount > MAX_INPUT:
        raise InvalidShipmentError(field, value, f"at most {MAX_INPUT:,f}")
    return amount


def format_currency(amount, symbol: str = "₽") -> str:
    return "{:,.2f} {}".format(amount, symbol)


def configure_logging(level: Union[int, str] = logging.INFO) -> None:
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

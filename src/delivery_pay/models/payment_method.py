# src/delivery_pay/models/payment_method.py
from decimal import Decimal
from enum import Enum
from typing import Dict, List, Union

from delivery_pay.exceptions import InvalidMethodError


class PaymentMethod(str, Enum):
    SBERPAY = "SberPay"
    MIRPAY = "Mir Pay"
    APPLEPAY = "Apple Pay"

    @property
    def surcharge_factor(self) -> Decimal:
        return METHOD_SURCHARGE_FACTORS[self]

    @classmethod
    def choices(cls) -> List[str]:
        return [m.value for m in cls]

    @classmethod
    def parse(cls, value: Union["PaymentMethod", str]) -> "PaymentMethod":
        """
        Resolve a user-supplied method name.

        Accepts a member, its display name ("Mir Pay"), or the same name
        without spaces and in any case ("mirpay", "MIRPAY").
        """
        if isinstance(value, cls):
            return value
        if not isinstance(value, str):
            raise InvalidMethodError(value, cls.choices())

        key = _normalize(value)
        for method in cls:
            if key in (_normalize(method.value), _normalize(method.name)):
                return method
        raise InvalidMethodError(value, cls.choices())


def _normalize(name: str) -> str:
    return "".join(name.split()).lower()


METHOD_SURCHARGE_FACTORS: Dict[PaymentMethod, Decimal] = {
    PaymentMethod.SBERPAY: Decimal("1.10"),   # +10%
    PaymentMethod.MIRPAY: Decimal("1.15"),    # +15%
    PaymentMethod.APPLEPAY: Decimal("1.35"),  # +35%
}

from typing import Optional


class PaymentError(Exception):
    """Base class for errors raised by delivery_pay."""


class InvalidMethodError(PaymentError, ValueError):
    def __init__(self, method, accepted: Optional[list] = None):
        self.method = method
        self.accepted = accepted or []
        message = f"Invalid payment method: {method!r}"
        if self.accepted:
            message += f" (expected one of: {', '.join(self.accepted)})"
        super().__init__(message)


class InvalidShipmentError(PaymentError, ValueError):
    def __init__(self, field: str, value, reason: str = "a non-negative number"):
        self.field = field
        self.value = value
        super().__init__(f"{field} must be {reason}, got {value!r}")

# src/delivery_pay/models/payment.py
import dataclasses
from dataclasses import dataclass, field
from datetime import datetime, timezone
from decimal import Decimal
from typing import Optional, Union

from delivery_pay.models.payment_method import PaymentMethod
from delivery_pay.services.pricing_engine import PricingEngine
from delivery_pay.utils.helpers import Number


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class Payment:
    """
    A completed delivery payment.

    Instances are frozen. A refund produces a new snapshot via `refund()`;
    the ledger swaps it into its history, so `refunded` never changes on an
    object a caller already holds.
    """
    id: int
    method: PaymentMethod
    base_amount: Decimal
    express_delivery: bool
    weight_kg: Decimal
    distance_km: Decimal
    final_amount: Decimal
    created_at: datetime = field(default_factory=_utcnow)
    refunded: bool = False

    @classmethod
    def create(
        cls,
        payment_id: int,
        method: Union[PaymentMethod, str],
        base_amount: Number,
        express_delivery: bool,
        weight_kg: Number,
        distance_km: Number,
        engine: Optional[PricingEngine] = None,
    ) -> "Payment":
        """Validate inputs and freeze the final amount at creation time."""
        engine = engine or PricingEngine()
        quote = engine.quote(method, base_amount, express_delivery, weight_kg, distance_km)
        return cls(
            id=payment_id,
            method=quote.method,
            base_amount=quote.base_amount,
            express_delivery=quote.express_delivery,
            weight_kg=quote.weight_kg,
            distance_km=quote.distance_km,
            final_amount=engine.price(quote),
        )

    def refund(self) -> "Payment":
        return dataclasses.replace(self, refunded=True)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "method": self.method.value,
            "base_amount": str(self.base_amount),
            "final_amount": str(self.final_amount),
            "express_delivery": self.express_delivery,
            "weight_kg": str(self.weight_kg),
            "distance_km": str(self.distance_km),
            "created_at": self.created_at.isoformat(),
            "refunded": self.refunded,
        }

    def __str__(self) -> str:
        return (
            f"Payment(#{self.id}, {self.method.value}, base={self.base_amount}, "
            f"final={self.final_amount}, express={self.express_delivery}, "
            f"weight={self.weight_kg}kg, distance={self.distance_km}km, "
            f"created={self.created_at.isoformat()}, refunded={self.refunded})"
        )

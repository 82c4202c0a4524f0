# src/delivery_pay/services/pricing_engine.py
"""
Delivery fee calculation.

The final amount is the base cost multiplied, in this order, by:
1) the payment method factor (SberPay, Mir Pay, Apple Pay)
2) the express delivery factor, if express was requested
3) the heavy parcel factor, if weight is above the threshold
4) the long distance factor, if distance is above the threshold

Factors compound in binary floating point and only the result is rounded,
as floor(amount * 100 + 0.5) / 100. Inputs and outputs are Decimal.
"""
import math
from dataclasses import dataclass
from decimal import Decimal
from typing import List, Optional, Tuple, Union

from delivery_pay.config import SurchargeConfig
from delivery_pay.models.payment_method import PaymentMethod
from delivery_pay.utils.helpers import Number, to_decimal

CENTS = Decimal("0.01")


@dataclass
class Surcharge:
    name: str
    factor: Decimal
    amount: Decimal  # running amount after this factor, unrounded


@dataclass
class ShipmentQuote:
    method: PaymentMethod
    base_amount: Decimal
    express_delivery: bool
    weight_kg: Decimal
    distance_km: Decimal


class PricingEngine:
    def __init__(self, config: Optional[SurchargeConfig] = None):
        self.config = config or SurchargeConfig()

    def quote(
        self,
        method: Union[PaymentMethod, str],
        base_amount: Number,
        express_delivery: bool,
        weight_kg: Number,
        distance_km: Number,
    ) -> ShipmentQuote:
        """Validate and normalize raw inputs. The method is checked first."""
        return ShipmentQuote(
            method=PaymentMethod.parse(method),
            base_amount=to_decimal("base_amount", base_amount),
            express_delivery=bool(express_delivery),
            weight_kg=to_decimal("weight_kg", weight_kg),
            distance_km=to_decimal("distance_km", distance_km),
        )

    def _factors(self, quote: ShipmentQuote) -> List[Tuple[str, Decimal]]:
        cfg = self.config
        factors = [(quote.method.value, quote.method.surcharge_factor)]
        if quote.express_delivery:
            factors.append(("express", cfg.express_factor))
        if float(quote.weight_kg) > float(cfg.heavy_threshold_kg):
            factors.append(("heavy", cfg.heavy_factor))
        if float(quote.distance_km) > float(cfg.long_distance_threshold_km):
            factors.append(("long_distance", cfg.long_distance_factor))
        return factors

    def _running_amounts(self, quote: ShipmentQuote) -> List[float]:
        amounts = []
        amount = float(quote.base_amount)
        for _, factor in self._factors(quote):
            amount *= float(factor)
            amounts.append(amount)
        return amounts

    def price(self, quote: ShipmentQuote) -> Decimal:
        amount = self._running_amounts(quote)[-1]
        rounded = math.floor(amount * 100 + 0.5) / 100
        return Decimal(repr(rounded)).quantize(CENTS)

    def compute_final_amount(
        self,
        method: Union[PaymentMethod, str],
        base_amount: Number,
        express_delivery: bool,
        weight_kg: Number,
        distance_km: Number,
    ) -> Decimal:
        quote = self.quote(method, base_amount, express_delivery, weight_kg, distance_km)
        return self.price(quote)

    def breakdown(
        self,
        method: Union[PaymentMethod, str],
        base_amount: Number,
        express_delivery: bool,
        weight_kg: Number,
        distance_km: Number,
    ) -> List[Surcharge]:
        """Applied surcharges in order, with unrounded running amounts."""
        quote = self.quote(method, base_amount, express_delivery, weight_kg, distance_km)
        return [
            Surcharge(name=name, factor=factor, amount=Decimal(repr(amount)))
            for (name, factor), amount in zip(self._factors(quote), self._running_amounts(quote))
        ]


_default_engine = PricingEngine()


def compute_final_amount(
    method: Union[PaymentMethod, str],
    base_amount: Number,
    express_delivery: bool,
    weight_kg: Number,
    distance_km: Number,
) -> Decimal:
    return _default_engine.compute_final_amount(
        method, base_amount, express_delivery, weight_kg, distance_km
    )

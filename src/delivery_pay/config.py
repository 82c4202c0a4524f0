from dataclasses import dataclass
from decimal import Decimal


class Config:
    DEBUG = True  # Set to False in production
    LOG_LEVEL = "INFO"
    CURRENCY_SYMBOL = "₽"


@dataclass(frozen=True)
class SurchargeConfig:
    """
    Surcharge factors and thresholds used by the pricing engine.

    Method factors are looked up on the PaymentMethod itself; everything that
    depends on the shipment lives here.
    """
    express_factor: Decimal = Decimal("1.40")
    heavy_factor: Decimal = Decimal("1.15")
    heavy_threshold_kg: Decimal = Decimal("10")
    long_distance_factor: Decimal = Decimal("1.12")
    long_distance_threshold_km: Decimal = Decimal("500")

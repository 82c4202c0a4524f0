from datetime import datetime
from decimal import Decimal
from typing import List

from pydantic import BaseModel, Field

from delivery_pay.core.ledger import RefundOutcome


class PaymentRequestSchema(BaseModel):
    # method stays a plain string so PaymentMethod.parse can report it
    method: str
    base_amount: Decimal
    express_delivery: bool = False
    weight_kg: Decimal = Decimal("0")
    distance_km: Decimal = Decimal("0")


class CostResponseSchema(BaseModel):
    method: str
    final_amount: Decimal


class PaymentRecordSchema(BaseModel):
    id: int
    method: str
    base_amount: Decimal
    final_amount: Decimal
    express_delivery: bool
    weight_kg: Decimal
    distance_km: Decimal
    created_at: datetime
    refunded: bool


class RefundResponseSchema(BaseModel):
    payment_id: int
    outcome: RefundOutcome


class PaginatedResponseSchema(BaseModel):
    total: int
    items: List[PaymentRecordSchema] = Field(default_factory=list)


class ErrorResponseSchema(BaseModel):
    detail: str

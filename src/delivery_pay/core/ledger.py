# src/delivery_pay/core/ledger.py
"""
In-memory payment ledger.

Owns the payment id counter and the append-only payment history. Payments
are created here (never elsewhere) so ids are handed out sequentially from 1
and a payment that fails validation does not consume one.
"""
import logging
import threading
from decimal import Decimal
from enum import Enum
from typing import Dict, List, Optional, Tuple, Union

from delivery_pay.models.payment import Payment
from delivery_pay.models.payment_method import PaymentMethod
from delivery_pay.services.pricing_engine import PricingEngine
from delivery_pay.utils.helpers import Number

logger = logging.getLogger(__name__)


class RefundOutcome(str, Enum):
    REFUNDED = "refunded"
    ALREADY_REFUNDED = "already_refunded"
    NOT_FOUND = "not_found"


class PaymentLedger:
    def __init__(self, engine: Optional[PricingEngine] = None):
        self.engine = engine or PricingEngine()
        self._payments: List[Payment] = []
        self._index: Dict[int, int] = {}  # payment id -> position in _payments
        self._next_id = 1
        self._lock = threading.Lock()

    def preview_cost(
        self,
        method: Union[PaymentMethod, str],
        base_amount: Number,
        express_delivery: bool,
        weight_kg: Number,
        distance_km: Number,
    ) -> Decimal:
        """Final amount a payment with these inputs would have. Records nothing."""
        return self.engine.compute_final_amount(
            method, base_amount, express_delivery, weight_kg, distance_km
        )

    def process_payment(
        self,
        method: Union[PaymentMethod, str],
        base_amount: Number,
        express_delivery: bool,
        weight_kg: Number,
        distance_km: Number,
    ) -> Payment:
        with self._lock:
            payment = Payment.create(
                self._next_id,
                method,
                base_amount,
                express_delivery,
                weight_kg,
                distance_km,
                engine=self.engine,
            )
            self._next_id += 1
            self._index[payment.id] = len(self._payments)
            self._payments.append(payment)

        logger.info("Payment processed: %s", payment)
        return payment

    def refund_payment(self, payment_id: int) -> RefundOutcome:
        with self._lock:
            pos = self._index.get(payment_id)
            if pos is None:
                outcome = RefundOutcome.NOT_FOUND
            elif self._payments[pos].refunded:
                outcome = RefundOutcome.ALREADY_REFUNDED
            else:
                self._payments[pos] = self._payments[pos].refund()
                outcome = RefundOutcome.REFUNDED

        if outcome is RefundOutcome.NOT_FOUND:
            logger.warning("Payment with id %s not found.", payment_id)
        elif outcome is RefundOutcome.ALREADY_REFUNDED:
            logger.info("Payment #%s was already refunded.", payment_id)
        else:
            logger.info("Payment #%s refunded.", payment_id)
        return outcome

    def get_payment(self, payment_id: int) -> Optional[Payment]:
        with self._lock:
            pos = self._index.get(payment_id)
            return None if pos is None else self._payments[pos]

    def history(self) -> Tuple[Payment, ...]:
        """Snapshot of all payments, oldest first."""
        with self._lock:
            return tuple(self._payments)

    def __len__(self) -> int:
        with self._lock:
            return len(self._payments)

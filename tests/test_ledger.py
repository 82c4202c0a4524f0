import threading
import unittest
from decimal import Decimal

from delivery_pay.core.ledger import PaymentLedger, RefundOutcome
from delivery_pay.exceptions import InvalidMethodError, InvalidShipmentError


class TestPaymentLedger(unittest.TestCase):

    def setUp(self):
        self.ledger = PaymentLedger()

    def test_preview_cost_records_nothing(self):
        cost = self.ledger.preview_cost("SberPay", 1000, False, 5, 100)
        self.assertEqual(cost, Decimal("1100.00"))
        self.assertEqual(self.ledger.history(), ())

    def test_preview_matches_processed_amount(self):
        args = ("Apple Pay", 1000, True, 12, 600)
        preview = self.ledger.preview_cost(*args)
        payment = self.ledger.process_payment(*args)
        self.assertEqual(payment.final_amount, preview)

    def test_sequential_ids_ignore_previews(self):
        ids = []
        for method in ("SberPay", "Mir Pay", "Apple Pay"):
            self.ledger.preview_cost(method, 100, False, 1, 1)
            ids.append(self.ledger.process_payment(method, 100, False, 1, 1).id)
            self.ledger.preview_cost(method, 200, True, 20, 900)
        self.assertEqual(ids, [1, 2, 3])

    def test_failed_validation_does_not_consume_id(self):
        self.ledger.process_payment("SberPay", 100, False, 1, 1)
        with self.assertRaises(InvalidMethodError):
            self.ledger.process_payment("PayPal", 100, False, 1, 1)
        with self.assertRaises(InvalidShipmentError):
            self.ledger.process_payment("SberPay", -100, False, 1, 1)
        payment = self.ledger.process_payment("SberPay", 100, False, 1, 1)
        self.assertEqual(payment.id, 2)
        self.assertEqual(len(self.ledger), 2)

    def test_invalid_method_in_preview(self):
        with self.assertRaises(InvalidMethodError):
            self.ledger.preview_cost("PayPal", 1000, False, 5, 100)

    def test_ids_are_per_ledger(self):
        self.ledger.process_payment("SberPay", 100, False, 1, 1)
        other = PaymentLedger()
        self.assertEqual(other.process_payment("SberPay", 100, False, 1, 1).id, 1)

    def test_refund_is_idempotent(self):
        self.ledger.process_payment("SberPay", 100, False, 1, 1)
        self.assertIs(self.ledger.refund_payment(1), RefundOutcome.REFUNDED)
        self.assertTrue(self.ledger.get_payment(1).refunded)
        self.assertIs(self.ledger.refund_payment(1), RefundOutcome.ALREADY_REFUNDED)
        self.assertTrue(self.ledger.get_payment(1).refunded)

    def test_refund_unknown_id(self):
        self.ledger.process_payment("SberPay", 100, False, 1, 1)
        before = self.ledger.history()
        self.assertIs(self.ledger.refund_payment(99), RefundOutcome.NOT_FOUND)
        self.assertEqual(self.ledger.history(), before)
        self.assertFalse(self.ledger.get_payment(1).refunded)

    def test_refund_keeps_order_and_other_records(self):
        for _ in range(3):
            self.ledger.process_payment("Mir Pay", 100, False, 1, 1)
        self.ledger.refund_payment(2)
        history = self.ledger.history()
        self.assertEqual([p.id for p in history], [1, 2, 3])
        self.assertEqual([p.refunded for p in history], [False, True, False])

    def test_history_is_read_only_snapshot(self):
        payment = self.ledger.process_payment("SberPay", 100, False, 1, 1)
        history = self.ledger.history()
        self.assertIsInstance(history, tuple)
        with self.assertRaises(AttributeError):
            history.append(payment)

        self.ledger.process_payment("SberPay", 100, False, 1, 1)
        self.assertEqual(len(history), 1)
        self.assertEqual(len(self.ledger.history()), 2)

    def test_refund_does_not_touch_held_snapshot(self):
        payment = self.ledger.process_payment("SberPay", 100, False, 1, 1)
        self.ledger.refund_payment(payment.id)
        self.assertFalse(payment.refunded)
        self.assertTrue(self.ledger.history()[0].refunded)

    def test_concurrent_payments_get_unique_ids(self):
        def pay():
            for _ in range(50):
                self.ledger.process_payment("SberPay", 100, False, 1, 1)

        workers = [threading.Thread(target=pay) for _ in range(4)]
        for w in workers:
            w.start()
        for w in workers:
            w.join()

        self.assertEqual(len(self.ledger), 200)
        self.assertEqual(sorted(p.id for p in self.ledger.history()), list(range(1, 201)))

    def test_get_payment_unknown(self):
        self.assertIsNone(self.ledger.get_payment(1))

    def test_process_logs_new_payment(self):
        with self.assertLogs("delivery_pay.core.ledger", level="INFO") as logs:
            self.ledger.process_payment("SberPay", 1000, False, 5, 100)
        self.assertIn("#1", logs.output[0])
        self.assertIn("1100.00", logs.output[0])

    def test_refund_logs_each_outcome(self):
        self.ledger.process_payment("SberPay", 100, False, 1, 1)
        with self.assertLogs("delivery_pay.core.ledger", level="INFO") as logs:
            self.ledger.refund_payment(1)
            self.ledger.refund_payment(1)
            self.ledger.refund_payment(5)
        self.assertIn("refunded", logs.output[0])
        self.assertIn("already refunded", logs.output[1])
        self.assertTrue(logs.output[2].startswith("WARNING"))
        self.assertIn("5", logs.output[2])


if __name__ == '__main__':
    unittest.main()

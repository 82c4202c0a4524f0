from flask import Blueprint, current_app, jsonify, request
from pydantic import ValidationError

from delivery_pay.api.schemas import (
    CostResponseSchema,
    ErrorResponseSchema,
    PaginatedResponseSchema,
    PaymentRecordSchema,
    PaymentRequestSchema,
    RefundResponseSchema,
)
from delivery_pay.core.ledger import PaymentLedger, RefundOutcome
from delivery_pay.exceptions import PaymentError
from delivery_pay.models.payment_method import PaymentMethod

api = Blueprint('api', __name__)


def get_ledger() -> PaymentLedger:
    return current_app.extensions['payment_ledger']


def _record(payment) -> dict:
    record = PaymentRecordSchema.model_validate(payment.to_dict())
    return record.model_dump(mode='json')


def _payment_request() -> PaymentRequestSchema:
    return PaymentRequestSchema.model_validate(request.get_json(silent=True) or {})


@api.errorhandler(PaymentError)
def handle_payment_error(exc):
    return jsonify(ErrorResponseSchema(detail=str(exc)).model_dump()), 400


@api.errorhandler(ValidationError)
def handle_validation_error(exc):
    errors = [
        {'field': '.'.join(str(loc) for loc in err['loc']), 'message': err['msg']}
        for err in exc.errors()
    ]
    return jsonify({'detail': 'Invalid request body', 'errors': errors}), 422


@api.route('/cost', methods=['POST'])
def preview_cost():
    data = _payment_request()
    final_amount = get_ledger().preview_cost(
        data.method, data.base_amount, data.express_delivery, data.weight_kg, data.distance_km
    )
    body = CostResponseSchema(
        method=PaymentMethod.parse(data.method).value, final_amount=final_amount
    )
    return jsonify(body.model_dump(mode='json')), 200


@api.route('/payments', methods=['POST'])
def process_payment():
    data = _payment_request()
    payment = get_ledger().process_payment(
        data.method, data.base_amount, data.express_delivery, data.weight_kg, data.distance_km
    )
    return jsonify(_record(payment)), 201


@api.route('/payments', methods=['GET'])
def list_payments():
    history = get_ledger().history()
    body = PaginatedResponseSchema(
        total=len(history),
        items=[PaymentRecordSchema.model_validate(p.to_dict()) for p in history],
    )
    return jsonify(body.model_dump(mode='json')), 200


@api.route('/payments/<int(signed=True):payment_id>/refund', methods=['POST'])
def refund_payment(payment_id):
    outcome = get_ledger().refund_payment(payment_id)
    body = RefundResponseSchema(payment_id=payment_id, outcome=outcome)
    status = 404 if outcome is RefundOutcome.NOT_FOUND else 200
    return jsonify(body.model_dump(mode='json')), status


def register_routes(app):
    app.register_blueprint(api)

from typing import Optional

from flask import Flask

from delivery_pay.api.routes import register_routes
from delivery_pay.config import Config
from delivery_pay.core.ledger import PaymentLedger
from delivery_pay.utils.helpers import configure_logging


def create_app(ledger: Optional[PaymentLedger] = None) -> Flask:
    app = Flask(__name__)
    app.config.from_object(Config)
    configure_logging(app.config['LOG_LEVEL'])

    app.extensions['payment_ledger'] = ledger or PaymentLedger()
    register_routes(app)

    return app


if __name__ == "__main__":
    app = create_app()
    app.run(debug=True)

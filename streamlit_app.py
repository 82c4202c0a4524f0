import os
import sys
import importlib

import streamlit as st


# =========================================================
#  GENERAL HELPERS
# =========================================================

BASE_DIR = os.path.dirname(os.path.abspath(__file__))


# =========================================================
#  DYNAMIC IMPORT HELPER (delivery_pay)
# =========================================================

def load_delivery_pay():
    """
    Make sure src/ is on sys.path and then import delivery_pay modules.
    Shows an error in the UI if something is wrong.
    """
    src_dir = os.path.join(BASE_DIR, "src")

    if src_dir not in sys.path:
        sys.path.insert(0, src_dir)

    try:
        ledger_mod = importlib.import_module("delivery_pay.core.ledger")
        pm_mod = importlib.import_module("delivery_pay.models.payment_method")
        exc_mod = importlib.import_module("delivery_pay.exceptions")
        config_mod = importlib.import_module("delivery_pay.config")
        helpers_mod = importlib.import_module("delivery_pay.utils.helpers")
    except ModuleNotFoundError as e:
        st.error(f"❌ Could not import delivery_pay: {e}")
        st.stop()

    return (
        ledger_mod.PaymentLedger,
        ledger_mod.RefundOutcome,
        pm_mod.PaymentMethod,
        exc_mod.PaymentError,
        config_mod.Config,
        helpers_mod,
    )


PaymentLedger, RefundOutcome, PaymentMethod, PaymentError, Config, helpers = load_delivery_pay()
helpers.configure_logging(Config.LOG_LEVEL)


def money(amount) -> str:
    return helpers.format_currency(amount, Config.CURRENCY_SYMBOL)


# =========================================================
#  SESSION STATE INIT
# =========================================================

def init_state():
    if "ledger" not in st.session_state:
        st.session_state.ledger = PaymentLedger()


init_state()


# =========================================================
#  PAGES
# =========================================================

def shipment_form():
    method = st.selectbox("Payment method", PaymentMethod.choices())
    base_amount = st.number_input("Base cost", min_value=0.0, value=1000.0, step=50.0)
    weight_kg = st.number_input("Weight (kg)", min_value=0.0, value=1.0, step=0.5)
    distance_km = st.number_input("Distance (km)", min_value=0.0, value=100.0, step=10.0)
    express = st.checkbox("Express delivery")
    return method, base_amount, express, weight_kg, distance_km


def page_checkout():
    st.header("📦 Delivery Checkout")
    ledger = st.session_state.ledger

    col1, col2 = st.columns(2)

    with col1:
        args = shipment_form()

    with col2:
        st.subheader("Cost preview")
        try:
            final_amount = ledger.preview_cost(*args)
            steps = ledger.engine.breakdown(*args)
        except PaymentError as e:
            st.error(str(e))
            return

        for step in steps:
            st.write(f"× {step.factor} ({step.name}) → {money(step.amount)}")
        st.metric("Total", money(final_amount))

        if st.button("Pay"):
            payment = ledger.process_payment(*args)
            st.success(f"Payment #{payment.id} accepted: {money(payment.final_amount)}")


def page_history():
    st.header("🧾 Payment History")
    ledger = st.session_state.ledger

    history = ledger.history()
    if not history:
        st.info("No payments yet.")
    else:
        st.dataframe([p.to_dict() for p in history])

    st.divider()
    st.subheader("Refund")
    payment_id = st.number_input("Payment ID", min_value=1, step=1, value=1)

    if st.button("Refund payment"):
        outcome = ledger.refund_payment(int(payment_id))
        if outcome is RefundOutcome.REFUNDED:
            st.success(f"Payment #{payment_id} refunded.")
        elif outcome is RefundOutcome.ALREADY_REFUNDED:
            st.warning(f"Payment #{payment_id} was already refunded.")
        else:
            st.error(f"Payment with ID {payment_id} not found.")


# =========================================================
#  MAIN
# =========================================================

def main():
    st.set_page_config(page_title="Delivery Payments", layout="wide")

    pages = {
        "Checkout": page_checkout,
        "History": page_history,
    }

    choice = st.sidebar.radio("Navigate", list(pages.keys()))
    pages[choice]()


if __name__ == "__main__":
    main()

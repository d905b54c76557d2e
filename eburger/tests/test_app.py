import base64
import io
from pathlib import Path

import pytest
import streamlit as st
from PIL import Image
from streamlit.testing.v1 import AppTest

from eburger.config import set_config_for_test
from eburger.data.backends.json_backend import JsonFilePersistence
from eburger.data.models import OrderStatus, PaymentMethod, StoreSettings
from eburger.store import OrderLedger, SettingsStore

APP_PATH = str(Path(__file__).parents[1] / "app.py")


@pytest.fixture(autouse=True)
def app_config(tmp_path):
    set_config_for_test(persistence_backend="json", data_dir=str(tmp_path))
    st.cache_resource.clear()
    yield
    st.cache_resource.clear()


def new_session() -> AppTest:
    at = AppTest.from_file(APP_PATH, default_timeout=30)
    return at.run()


def click_button(at: AppTest, label: str) -> AppTest:
    return next(b for b in at.button if b.label == label).click().run()


def place_order(at: AppTest, name: str, table: str) -> AppTest:
    at.text_input(key="customer_name").input(name)
    at.text_input(key="table_no").input(table)
    return click_button(at, "Place Order")


def qr_data_uri() -> str:
    buf = io.BytesIO()
    Image.new("RGB", (8, 8), "black").save(buf, format="PNG")
    return "data:image/png;base64," + base64.b64encode(buf.getvalue()).decode("ascii")


def test_menu_renders_default_products():
    at = new_session()
    assert not at.exception
    assert at.title[0].value == "Hungry?"
    assert "Your cart is empty." in [c.value for c in at.caption]
    assert len(at.warning) == 0


def test_operator_dashboard_renders_history(tmp_path):
    """After sign-in the dashboard shows incoming orders and the history table."""
    at = new_session()
    at.button(key="add-1").click().run()
    place_order(at, "Alex", "5")

    at.radio(key="view").set_value("Admin Area").run()
    next(t for t in at.text_input if t.label == "Username").input("admin")
    next(t for t in at.text_input if t.label == "Password").input("admin123")
    click_button(at, "Sign in")

    assert not at.exception
    assert at.title[0].value == "Dashboard"
    assert len(at.dataframe) == 1
    assert len(at.warning) == 0
    assert any(m.value == "### Incoming Orders (1)" for m in at.markdown)


def test_add_to_cart_and_checkout(tmp_path):
    """An order placed through the page is saved and the session cart is emptied."""
    at = new_session()
    at.button(key="add-1").click().run()
    at.button(key="add-1").click().run()
    assert at.session_state["cart"].count() == 2

    place_order(at, "Alex", "5")

    assert not at.exception
    assert at.session_state["cart"].is_empty()
    orders = OrderLedger(JsonFilePersistence(tmp_path)).list()
    assert len(orders) == 1
    assert orders[0].customer_name == "Alex"
    assert orders[0].payment_method is PaymentMethod.CASH
    assert orders[0].status is OrderStatus.PENDING


def test_checkout_without_name_shows_error(tmp_path):
    at = new_session()
    at.button(key="add-1").click().run()
    place_order(at, "", "5")

    assert [e.value for e in at.error] == ["missing name"]
    assert at.session_state["cart"].count() == 1
    assert OrderLedger(JsonFilePersistence(tmp_path)).list() == []


def test_choosing_qr_shows_code_before_submit(tmp_path):
    """Selecting QR shows the store's code without submitting the checkout form."""
    SettingsStore(JsonFilePersistence(tmp_path)).set(StoreSettings(qr_code_image=qr_data_uri()))
    at = new_session()
    at.button(key="add-1").click().run()

    at.radio(key="payment_method").set_value("QR").run()

    assert not at.exception
    assert "Scan to pay RM 12.50" in [c.value for c in at.caption]
    assert OrderLedger(JsonFilePersistence(tmp_path)).list() == []


def test_choosing_qr_without_code_shows_notice():
    at = new_session()
    at.button(key="add-1").click().run()

    at.radio(key="payment_method").set_value("QR").run()

    assert any("QR code not configured" in i.value for i in at.info)


def test_qr_order_records_payment_method(tmp_path):
    at = new_session()
    at.button(key="add-2").click().run()
    at.radio(key="payment_method").set_value("QR").run()
    place_order(at, "Sam", "2")

    orders = OrderLedger(JsonFilePersistence(tmp_path)).list()
    assert [o.payment_method for o in orders] == [PaymentMethod.QR]


def test_two_sessions_both_orders_saved(tmp_path):
    """Browser sessions running side by side share the stores; neither order is lost."""
    alex = new_session()
    sam = new_session()
    alex.button(key="add-1").click().run()
    sam.button(key="add-2").click().run()

    place_order(alex, "Alex", "5")
    place_order(sam, "Sam", "2")

    orders = OrderLedger(JsonFilePersistence(tmp_path)).list()
    assert [o.customer_name for o in orders] == ["Sam", "Alex"]
    assert not alex.exception and not sam.exception


@pytest.mark.parametrize("blob", [
    "{not json",
    '[{"id": "1", "name": "  ", "description": "", "price": 9, "category": "Beef", "image": ""}]',
])
def test_unreadable_saved_data_reported_in_page(tmp_path, blob):
    """A corrupt saved catalog shows an error message instead of a traceback."""
    (tmp_path / "eburger_products.json").write_text(blob, encoding="utf-8")

    at = new_session()

    assert not at.exception
    assert len(at.error) == 1
    assert at.error[0].value.startswith("Saved data could not be loaded")

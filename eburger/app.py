import base64
from decimal import Decimal

import streamlit as st

# Configuration
from eburger.config import get_config
from eburger.logging import get_logger

from eburger.assist import get_description_assist
from eburger.auth import get_operator_auth
from eburger.data.models import Order, PaymentMethod, ProductDraft
from eburger.errors import StorefrontError
from eburger.store import CartEngine, Storefront
from eburger.store.catalog import ALL_CATEGORIES
from eburger.store.seed_data import MENU_CATEGORIES

config = get_config()
logger = get_logger(__name__)
CUR = config.currency_label

st.set_page_config(page_title=config.store_name, layout="wide")


@st.cache_resource
def shared_storefront(backend: str, data_dir: str) -> Storefront:
    """One set of stores per process, shared by every browser session."""
    logger.info(f"Opening {backend} stores under {data_dir}")
    return Storefront.open()


# -----------------------------------------------------------------------------
# Session state: only the cart and UI flags are per session. Catalog, settings
# and orders come from the shared stores, reloaded on every run.
# -----------------------------------------------------------------------------
if "cart" not in st.session_state:
    st.session_state.cart = CartEngine()
    st.session_state.is_operator = False
    st.session_state.editing_id = None
    st.session_state.draft = ProductDraft(category=MENU_CATEGORIES[0])

try:
    shared = shared_storefront(config.persistence_backend, config.data_dir)
    shared.refresh()
except StorefrontError as e:
    logger.error(f"Could not load saved data: {e}")
    st.error(f"Saved data could not be loaded: {e}")
    st.stop()
shop: Storefront = shared.session(st.session_state.cart)


def money(amount) -> str:
    return f"{CUR} {Decimal(amount):.2f}"


def data_uri_bytes(uri: str) -> bytes:
    _, _, payload = uri.partition(",")
    return base64.b64decode(payload or uri)


def run(action, success: str = None) -> bool:
    """Run a store action and surface failures in the page instead of raising."""
    try:
        action()
    except StorefrontError as e:
        logger.warning(f"Action failed: {e}")
        st.error(str(e))
        return False
    if success:
        st.toast(success)
    return True


# -----------------------------------------------------------------------------
# Sidebar: view switch + cart
# -----------------------------------------------------------------------------
st.sidebar.header(config.store_name)
view = st.sidebar.radio("View", ["Menu", "Admin Area"], horizontal=True, key="view")

if view == "Menu":
    st.sidebar.markdown(f"### Your Order ({shop.cart.count()})")

    if shop.cart.is_empty():
        st.sidebar.caption("Your cart is empty.")

    for line in shop.cart.lines():
        st.sidebar.markdown(f"**{line.name}** &nbsp; {money(line.price)}")
        c1, c2, c3, c4 = st.sidebar.columns([1, 1, 1, 2])
        if c1.button("−", key=f"dec-{line.id}"):
            shop.cart.update_quantity(line.id, -1)
            st.rerun()
        c2.write(str(line.quantity))
        if c3.button("+", key=f"inc-{line.id}"):
            shop.cart.update_quantity(line.id, 1)
            st.rerun()
        if c4.button("Remove", key=f"rm-{line.id}"):
            shop.cart.remove_item(line.id)
            st.rerun()

    if not shop.cart.is_empty():
        total = shop.cart.total()
        st.sidebar.metric("Total", money(total))

        # Kept out of the form; a change reruns the page at once
        method = st.sidebar.radio(
            "Payment", [m.value for m in PaymentMethod], horizontal=True, key="payment_method"
        )
        if method == PaymentMethod.QR.value:
            qr = shop.settings.get().qr_code_image
            if qr:
                st.sidebar.image(data_uri_bytes(qr), width=240)
                st.sidebar.caption(f"Scan to pay {money(total)}")
            else:
                st.sidebar.info("QR code not configured by the store. Please pay at the counter.")

        with st.sidebar.form("checkout"):
            customer_name = st.text_input("Your name", key="customer_name")
            table_no = st.text_input("Table no.", key="table_no")
            placed = st.form_submit_button("Place Order")

        if placed:
            placing = lambda: shop.checkout.checkout(customer_name, table_no, method)
            if run(placing, "Order placed successfully!"):
                st.rerun()

# -----------------------------------------------------------------------------
# Customer view: hero, category filter, product grid
# -----------------------------------------------------------------------------
if view == "Menu":
    st.title("Hungry?")
    st.caption("Order the best burgers in town, delivered to your table.")

    categories = [ALL_CATEGORIES] + shop.catalog.categories()
    category = st.radio("Category", categories, horizontal=True, label_visibility="collapsed")
    products = shop.catalog.by_category(category)

    if not products:
        st.info("No products found in this category.")

    cols = st.columns(3)
    for i, product in enumerate(products):
        with cols[i % 3]:
            with st.container(border=True):
                if product.image:
                    st.image(product.image, width="stretch")
                st.markdown(f"**{product.name}** · {money(product.price)}")
                st.caption(product.description)
                if st.button("Add to cart", key=f"add-{product.id}"):
                    shop.cart.add_item(product)
                    st.rerun()
    st.stop()

# -----------------------------------------------------------------------------
# Operator gate
# -----------------------------------------------------------------------------
if not st.session_state.is_operator:
    st.title("Admin Access")
    with st.form("login"):
        username = st.text_input("Username")
        password = st.text_input("Password", type="password")
        submitted = st.form_submit_button("Sign in")
    if submitted:
        if get_operator_auth().check_credentials(username, password):
            st.session_state.is_operator = True
            st.rerun()
        st.error("Invalid credentials.")
    st.stop()

st.title("Dashboard")
if st.sidebar.button("Logout"):
    st.session_state.is_operator = False
    st.rerun()

tab_orders, tab_products, tab_settings = st.tabs(["Orders", "Products", "Settings"])

# -----------------------------------------------------------------------------
# Orders: incoming (PENDING) with actions, then history
# -----------------------------------------------------------------------------
def render_order(order: Order) -> None:
    st.markdown(
        f"**{order.customer_name}** · Table {order.table_no} · {order.payment_method.value} · "
        f"{order.created_at:%Y-%m-%d %H:%M} · **{money(order.total_amount)}**"
    )
    for line in order.items:
        st.caption(f"{line.quantity}x {line.name} = {money(line.line_total)}")


with tab_orders:
    pending = shop.ledger.pending()
    st.markdown(f"### Incoming Orders ({len(pending)})")
    if not pending:
        st.caption("No pending orders.")
    for order in pending:
        with st.container(border=True):
            render_order(order)
            c1, c2 = st.columns(2)
            if c1.button("Complete", key=f"done-{order.id}"):
                if run(lambda: shop.ledger.complete(order.id), "Order completed"):
                    st.rerun()
            if c2.button("Cancel", key=f"cancel-{order.id}"):
                if run(lambda: shop.ledger.cancel(order.id), "Order cancelled"):
                    st.rerun()

    st.markdown("### Order History")
    history = shop.ledger.to_frame()
    history = history[history["status"] != "PENDING"]
    st.dataframe(history, width="stretch", hide_index=True)

# -----------------------------------------------------------------------------
# Products: add/edit form with description assist, product list
# -----------------------------------------------------------------------------
with tab_products:
    editing_id = st.session_state.editing_id
    draft: ProductDraft = st.session_state.draft
    st.markdown("### Edit Item" if editing_id else "### Add New Item")

    name = st.text_input("Name", value=draft.name or "", placeholder="e.g. The Big Chief")
    category_idx = MENU_CATEGORIES.index(draft.category) if draft.category in MENU_CATEGORIES else 0
    category = st.selectbox("Category", MENU_CATEGORIES, index=category_idx)
    price = st.number_input(f"Price ({CUR})", min_value=0.0, step=0.5, value=float(draft.price or 0))

    if st.button("Generate description", disabled=not name):
        with st.spinner("Writing..."):
            text = get_description_assist().generate(name, category)
        st.session_state.draft = draft.model_copy(update={"name": name, "category": category, "description": text})
        st.rerun()

    description = st.text_area("Description", value=draft.description or "")
    image = st.text_input("Image URL", value=draft.image or "")

    c1, c2 = st.columns(2)
    if c1.button("Update Product" if editing_id else "Add Product", type="primary"):
        submitted = ProductDraft(
            name=name, category=category, price=Decimal(str(price)), description=description, image=image
        )
        if editing_id:
            ok = run(lambda: shop.catalog.revise(editing_id, submitted), "Product updated")
        else:
            ok = run(lambda: shop.catalog.create(submitted), "Product added")
        if ok:
            st.session_state.editing_id = None
            st.session_state.draft = ProductDraft(category=MENU_CATEGORIES[0])
            st.rerun()
    if editing_id and c2.button("Cancel edit"):
        st.session_state.editing_id = None
        st.session_state.draft = ProductDraft(category=MENU_CATEGORIES[0])
        st.rerun()

    st.markdown("### Menu Items")
    for product in shop.catalog.list():
        c1, c2, c3 = st.columns([4, 1, 1])
        c1.markdown(f"**{product.name}** · {money(product.price)} · `{product.category}`")
        if c2.button("Edit", key=f"edit-{product.id}"):
            st.session_state.editing_id = product.id
            st.session_state.draft = ProductDraft.from_product(product)
            st.rerun()
        if c3.button("Delete", key=f"del-{product.id}"):
            if run(lambda: shop.catalog.remove(product.id), "Product removed"):
                st.rerun()

# -----------------------------------------------------------------------------
# Settings: payment QR image
# -----------------------------------------------------------------------------
with tab_settings:
    st.markdown("### Payment QR Code")
    current = shop.settings.get()
    if current.has_qr:
        st.image(data_uri_bytes(current.qr_code_image), width=240)
        if st.button("Remove QR Code"):
            if run(shop.settings.clear_qr, "QR code removed"):
                st.rerun()
    else:
        st.caption("No QR code uploaded. Customers choosing QR will be asked to pay at the counter.")

    upload = st.file_uploader("Upload QR image", type=["png", "jpg", "jpeg", "gif", "webp"])
    if upload is not None and st.button("Save QR Code"):
        encoded = base64.b64encode(upload.getvalue()).decode("ascii")
        uri = f"data:{upload.type or 'image/png'};base64,{encoded}"
        if run(lambda: shop.settings.set(current.model_copy(update={"qr_code_image": uri})), "QR code saved"):
            st.rerun()

# -----------------------------------------------------------------------------
# Footer
# -----------------------------------------------------------------------------
with st.expander("Data source"):
    st.write(
        f"Menu, orders and settings are saved as versioned JSON documents via the "
        f"**{config.persistence_backend}** persistence backend (`{config.data_dir}/`)."
    )

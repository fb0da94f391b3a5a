import sys
import os
import logging
import streamlit as st

sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

from pricing.config import config
from pricing.discounts import CampaignStacking
from pricing.domain import DiscountType
from pricing.service import CatalogService, CheckoutService
from pricing.transforms import load_seed
from Report_Service.report import cart_report, format_amount, render_cart

logging.basicConfig(level=logging.INFO, format="%(asctime)s - %(levelname)s - %(message)s")


# ============ Кэширование данных ============
@st.cache_resource
def get_seed():
    return load_seed(config.SEED_PATH)


# ============ Инициализация ============
st.set_page_config(
    page_title="Cart Pricing",
    page_icon="🛒",
    layout="wide",
    initial_sidebar_state="expanded",
)

seed = get_seed()
catalog = CatalogService(seed)

# Корзина в сессии хранится как пары (product_id, qty)
if "cart_lines" not in st.session_state:
    st.session_state.cart_lines = ()


def add_line(pid: str, qty: int):
    st.session_state.cart_lines = st.session_state.cart_lines + ((pid, qty),)


def describe_discount(value: float, kind: DiscountType) -> str:
    return f"{value:g}%" if kind == DiscountType.RATE else format_amount(value)


# ============ HEADER ============
st.title("🛒 Расчёт стоимости корзины")

# ============ SIDEBAR ============
with st.sidebar:
    st.header("📂 Навигация")
    page = st.radio(
        "Выберите раздел:",
        ["🏪 Каталог", "🛒 Корзина", "🎯 Акции"],
        label_visibility="collapsed",
    )

    st.divider()
    stacking = st.selectbox(
        "Несколько кампаний",
        list(CampaignStacking),
        index=list(CampaignStacking).index(config.CAMPAIGN_STACKING),
        format_func=lambda s: "последняя сработавшая" if s == CampaignStacking.LAST_WINS else "сумма",
    )

checkout_service = CheckoutService(seed, stacking)


# ============ PAGE: КАТАЛОГ ============
if page == "🏪 Каталог":
    st.header("🏪 Каталог товаров")

    roots = [c for c in seed.categories if c.parent_id is None]
    selected = st.selectbox(
        "📂 Категория",
        [None] + roots,
        format_func=lambda c: "Все" if c is None else c.title,
    )
    shown = catalog.products_by_category(selected.id) if selected else seed.products
    if selected:
        subcats = catalog.get_category_tree(selected.id)[1:]
        if subcats:
            st.caption("Включая: " + ", ".join(c.title for c in subcats))

    st.info(f"🔍 Найдено товаров: **{len(shown)}**")

    for p in shown:
        cols = st.columns([5, 2, 2, 2])
        with cols[0]:
            st.markdown(f"**{p.title}**")
            st.caption(seed.categories.title_of(p.category_id))
        with cols[1]:
            st.write(format_amount(p.price))
        with cols[2]:
            qty = st.number_input(
                "Кол-во",
                min_value=1,
                value=1,
                key=f"qty_{p.id}",
                label_visibility="collapsed",
            )
        with cols[3]:
            if st.button("➕ В корзину", key=f"add_{p.id}"):
                add_line(p.id, int(qty))
                st.success(f"✅ {p.title} × {qty}")


# ============ PAGE: КОРЗИНА ============
elif page == "🛒 Корзина":
    st.header("🛒 Ваша корзина")

    if not st.session_state.cart_lines:
        st.info("🛍️ Корзина пуста. Перейдите в каталог!")
    else:

        def show_error(error: dict):
            st.error(f"❌ Ошибка: {error['error']}")

        def show_cart(cart):
            report = cart_report(cart)
            st.dataframe(report["rows"], use_container_width=True)

            col1, col2, col3, col4 = st.columns(4)
            with col1:
                st.metric("💰 Сумма", format_amount(report["total_amount"]))
            with col2:
                st.metric("🏷️ Скидка", format_amount(report["total_discount"]))
            with col3:
                st.metric("✅ Со скидками", format_amount(report["total_after_discounts"]))
            with col4:
                st.metric("🚚 Доставка", format_amount(report["delivery_cost"]))

            with st.expander("Текстовый отчёт"):
                st.code(render_cart(cart))

        checkout_service.cart(st.session_state.cart_lines).fold(show_error, show_cart)

        if st.button("🗑️ Очистить корзину"):
            st.session_state.cart_lines = ()
            st.rerun()


# ============ PAGE: АКЦИИ ============
elif page == "🎯 Акции":
    st.header("🎯 Кампании и купон")

    for campaign in seed.campaigns:
        title = seed.categories.get(campaign.category_id).map(lambda c: c.title)
        st.write(
            f"• **{title.get_or_else(campaign.category_id)}**: "
            f"{describe_discount(campaign.value, campaign.kind)} "
            f"от {campaign.minimum_item_count} шт."
        )

    st.divider()
    if seed.coupon is None:
        st.caption("Купон не задан")
    else:
        st.write(
            f"🎟️ Купон: {describe_discount(seed.coupon.value, seed.coupon.kind)} "
            f"при заказе от {format_amount(seed.coupon.minimum_order_amount)}"
        )

    st.divider()
    d = seed.delivery
    st.write(
        f"🚚 Доставка: {format_amount(d.cost_per_delivery)} за категорию + "
        f"{format_amount(d.cost_per_product)} за единицу + {format_amount(d.fixed_cost)}"
    )

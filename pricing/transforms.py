import json
import logging
from dataclasses import dataclass
from functools import reduce
from typing import Callable, Optional, Tuple

from .cart import ShoppingCart
from .categories import CategoryTree
from .config import PricingConfig, config
from .delivery import DeliveryCostCalculator
from .discounts import CampaignStacking
from .domain import Campaign, Category, Coupon, DiscountType, Product
from .errors import InvalidArgument
from .ftypes import Either, Maybe

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Seed:
    categories: CategoryTree
    products: Tuple[Product, ...]
    campaigns: Tuple[Campaign, ...]
    coupon: Optional[Coupon]
    delivery: DeliveryCostCalculator


def load_seed(path: str, settings: PricingConfig = config) -> Seed:
    """Загружает seed.json: категории, товары, кампании, купон, тарифы доставки"""
    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)

    try:
        categories = CategoryTree(
            tuple(
                Category(
                    id=str(c["id"]), title=c["title"], parent_id=c.get("parent_id")
                )
                for c in data.get("categories", [])
            )
        )
        products = tuple(
            Product(
                id=str(p["id"]),
                title=p["title"],
                price=float(p["price"]),
                category_id=str(p["category_id"]),
            )
            for p in data.get("products", [])
        )
        orphan = next((p for p in products if p.category_id not in categories), None)
        if orphan is not None:
            raise InvalidArgument(
                f"product '{orphan.id}' refers to unknown category '{orphan.category_id}'"
            )
        campaigns = tuple(
            Campaign(
                value=float(c["value"]),
                kind=DiscountType(c["kind"]),
                category_id=str(c["category_id"]),
                minimum_item_count=int(c["minimum_item_count"]),
            )
            for c in data.get("campaigns", [])
        )
        raw_coupon = data.get("coupon")
        coupon = (
            Coupon(
                value=float(raw_coupon["value"]),
                kind=DiscountType(raw_coupon["kind"]),
                minimum_order_amount=float(raw_coupon["minimum_order_amount"]),
            )
            if raw_coupon
            else None
        )
        raw_delivery = data.get("delivery", {})
        delivery = DeliveryCostCalculator(
            cost_per_delivery=float(
                raw_delivery.get("cost_per_delivery", settings.COST_PER_DELIVERY)
            ),
            cost_per_product=float(
                raw_delivery.get("cost_per_product", settings.COST_PER_PRODUCT)
            ),
            fixed_cost=float(raw_delivery.get("fixed_cost", settings.FIXED_COST)),
        )
    except InvalidArgument:
        raise
    except (KeyError, TypeError, ValueError) as exc:
        raise InvalidArgument(f"malformed seed {path}: {exc!r}") from exc

    logger.info(
        "Loaded seed %s: %d categories, %d products, %d campaigns",
        path,
        len(categories),
        len(products),
        len(campaigns),
    )
    return Seed(categories, products, campaigns, coupon, delivery)


# ============ Поиск ============


def safe_product(products: Tuple[Product, ...], pid: str) -> Maybe[Product]:
    """Безопасный поиск товара по id"""
    return Maybe.from_optional(next((p for p in products if p.id == pid), None))


def by_category(tree: CategoryTree, root_id: str) -> Callable[[Product], bool]:
    """Фильтр: товар из категории root_id или её подкатегорий"""
    return lambda p: tree.covers(root_id, p.category_id)


# ============ Сборка корзины ============


def build_cart(
    seed: Seed,
    lines: Tuple[Tuple[str, int], ...],
    stacking: Optional[CampaignStacking] = None,
    with_promotions: bool = True,
) -> Either[dict, ShoppingCart]:
    """
    Собирает корзину из пар (product_id, qty) → Either[error, ShoppingCart]
    Left, если товар не найден или данные некорректны.
    """

    def resolve(
        acc: Either[dict, Tuple[Tuple[Product, int], ...]], line: Tuple[str, int]
    ):
        pid, qty = line
        return acc.bind(
            lambda resolved: safe_product(seed.products, pid)
            .to_either({"error": f"Product '{pid}' not found"})
            .map(lambda product: resolved + ((product, qty),))
        )

    def fill(resolved: Tuple[Tuple[Product, int], ...]) -> ShoppingCart:
        cart = ShoppingCart(
            seed.delivery, seed.categories, stacking or config.CAMPAIGN_STACKING
        )
        for product, qty in resolved:
            cart.add_item(product, qty)
        if with_promotions:
            cart.apply_discounts(*seed.campaigns)
            if seed.coupon is not None:
                cart.apply_coupon(seed.coupon)
        return cart

    result = reduce(resolve, lines, Either.right(())).bind(
        lambda resolved: Either.attempt(lambda: fill(resolved), (InvalidArgument,))
    )
    if result.is_left:
        logger.warning("Cart rejected: %s", result.value["error"])
    return result

import logging
from typing import Dict, List, Optional, Tuple

from .categories import CategoryTree
from .delivery import DeliveryCalculator
from .discounts import (
    CampaignStacking,
    campaign_discount,
    combine_campaign_discounts,
    coupon_discount,
    iter_eligible_items,
)
from .domain import Campaign, CartSummary, Coupon, LineItem, Product
from .errors import InvalidArgument

logger = logging.getLogger(__name__)


class ShoppingCart:
    """
    Корзина: позиции по id товара (порядок добавления сохраняется),
    список кампаний и один слот под купон.
    Все проверки выполняются до изменения состояния.
    """

    def __init__(
        self,
        delivery_calculator: DeliveryCalculator,
        categories: CategoryTree,
        stacking: CampaignStacking = CampaignStacking.LAST_WINS,
    ):
        if delivery_calculator is None:
            raise InvalidArgument("delivery calculator is required")
        if categories is None:
            raise InvalidArgument("category tree is required")

        self._delivery_calculator = delivery_calculator
        self._categories = categories
        self._stacking = stacking
        self._items: Dict[str, LineItem] = {}
        self._campaigns: List[Campaign] = []
        self._coupon: Optional[Coupon] = None

    # ============ Изменение корзины ============

    def add_item(self, product: Product, quantity: int) -> None:
        if product is None:
            raise InvalidArgument("product is required")
        if quantity < 1:
            raise InvalidArgument(f"quantity must be at least 1, got {quantity}")
        if product.category_id not in self._categories:
            raise InvalidArgument(f"unknown category '{product.category_id}'")

        existing = self._items.get(product.id)
        current_qty = existing.quantity if existing else 0
        self._items[product.id] = LineItem(product, current_qty + quantity)
        logger.debug("Cart: %s x%d (was %d)", product.title, quantity, current_qty)

    def apply_discounts(self, *campaigns: Campaign) -> None:
        if any(c is None for c in campaigns):
            raise InvalidArgument("campaign is required")
        self._campaigns.extend(campaigns)
        logger.debug("Cart: %d campaign(s) applied", len(self._campaigns))

    def apply_coupon(self, coupon: Coupon) -> None:
        if coupon is None:
            raise InvalidArgument("coupon is required")
        self._coupon = coupon

    # ============ Состояние ============

    @property
    def items(self) -> Tuple[LineItem, ...]:
        return tuple(self._items.values())

    @property
    def campaigns(self) -> Tuple[Campaign, ...]:
        return tuple(self._campaigns)

    @property
    def coupon(self) -> Optional[Coupon]:
        return self._coupon

    @property
    def stacking(self) -> CampaignStacking:
        return self._stacking

    def quantity_of(self, product: Product) -> int:
        item = self._items.get(product.id)
        return item.quantity if item else 0

    @property
    def total_amount(self) -> float:
        return sum(item.line_total for item in self._items.values())

    @property
    def number_of_products(self) -> int:
        return sum(item.quantity for item in self._items.values())

    @property
    def number_of_categories(self) -> int:
        # считаем по названию категории, а не по id
        titles = {
            self._categories.title_of(item.product.category_id)
            for item in self._items.values()
        }
        return len(titles)

    def grouped_items(self) -> Tuple[Tuple[str, Tuple[LineItem, ...]], ...]:
        """Позиции, сгруппированные по названию категории, в порядке первого появления"""
        groups: Dict[str, List[LineItem]] = {}
        for item in self._items.values():
            title = self._categories.title_of(item.product.category_id)
            groups.setdefault(title, []).append(item)
        return tuple((title, tuple(items)) for title, items in groups.items())

    # ============ Скидки и итоги ============

    def get_campaign_discount(self) -> float:
        items = self.items
        per_campaign = (
            campaign_discount(c, iter_eligible_items(items, c, self._categories))
            for c in self._campaigns
        )
        return combine_campaign_discounts(per_campaign, self._stacking)

    def get_coupon_discount(self) -> float:
        return coupon_discount(self._coupon, self.total_amount)

    def get_total_amount_after_discounts(self) -> float:
        # сначала кампании, затем купон от остатка
        amount = self.total_amount - self.get_campaign_discount()
        return amount - coupon_discount(self._coupon, amount)

    def get_delivery_cost(self) -> float:
        return self._delivery_calculator.calculate_for(self)

    def summary(self) -> CartSummary:
        total = self.total_amount
        after = self.get_total_amount_after_discounts()
        return CartSummary(
            total_amount=total,
            total_after_discounts=after,
            total_discount=total - after,
            delivery_cost=self.get_delivery_cost(),
        )

from typing import Optional, Tuple

from Report_Service.report import cart_report

from .cart import ShoppingCart
from .discounts import CampaignStacking
from .domain import Category, Product
from .ftypes import Either
from .transforms import Seed, build_cart, by_category


class CatalogService:
    """Фасад для работы с каталогом"""

    def __init__(self, seed: Seed):
        self.seed = seed

    def products_by_category(self, root_id: str) -> Tuple[Product, ...]:
        """Возвращает все товары категории и её подкатегорий"""
        if root_id not in self.seed.categories:
            return ()
        in_tree = by_category(self.seed.categories, root_id)
        return tuple(filter(in_tree, self.seed.products))

    def get_category_tree(self, root_id: str) -> Tuple[Category, ...]:
        """Возвращает дерево категорий от корня"""
        return self.seed.categories.subtree(root_id)


class CheckoutService:
    """Фасад оформления: корзина из seed + отчёт для отображения"""

    def __init__(self, seed: Seed, stacking: Optional[CampaignStacking] = None):
        self.seed = seed
        self.stacking = stacking

    def cart(self, lines: Tuple[Tuple[str, int], ...]) -> Either[dict, ShoppingCart]:
        return build_cart(self.seed, lines, self.stacking)

    def checkout(self, lines: Tuple[Tuple[str, int], ...]) -> Either[dict, dict]:
        """
        Корзина с кампаниями и купоном из seed → отчёт.
        Left({"error": ...}) если позиции некорректны.
        """
        return self.cart(lines).map(cart_report)

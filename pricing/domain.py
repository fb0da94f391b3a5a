import uuid
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from .errors import InvalidArgument


@dataclass(frozen=True)
class Category:
    id: str
    title: str
    parent_id: Optional[str] = None


@dataclass(frozen=True)
class Product:
    """Товар. Идентичность задаётся id, а не совпадением полей"""

    id: str
    title: str
    price: float
    category_id: str

    def __post_init__(self):
        if self.price < 0:
            raise InvalidArgument(f"price must be non-negative, got {self.price}")


def new_product(title: str, price: float, category_id: str) -> Product:
    """Создаёт товар со свежим стабильным идентификатором"""
    return Product(id=str(uuid.uuid4()), title=title, price=price, category_id=category_id)


class DiscountType(Enum):
    AMOUNT = "amount"  # фиксированная сумма
    RATE = "rate"  # процент


@dataclass(frozen=True)
class Discount:
    value: float
    kind: DiscountType


@dataclass(frozen=True)
class Campaign(Discount):
    """Скидка на категорию (и её подкатегории) от minimum_item_count единиц"""

    category_id: str
    minimum_item_count: int


@dataclass(frozen=True)
class Coupon(Discount):
    """Скидка на весь заказ от minimum_order_amount"""

    minimum_order_amount: float


@dataclass(frozen=True)
class LineItem:
    product: Product
    quantity: int

    @property
    def line_total(self) -> float:
        return self.product.price * self.quantity


@dataclass(frozen=True)
class CartSummary:
    total_amount: float
    total_after_discounts: float
    total_discount: float
    delivery_cost: float

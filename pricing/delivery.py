from dataclasses import dataclass
from typing import Protocol

from .errors import InvalidArgument


class CartView(Protocol):
    """То, что калькулятору доставки нужно знать о корзине"""

    @property
    def number_of_categories(self) -> int: ...

    @property
    def number_of_products(self) -> int: ...


class DeliveryCalculator(Protocol):
    def calculate_for(self, cart: CartView) -> float: ...


@dataclass(frozen=True)
class DeliveryCostCalculator:
    """
    Стоимость доставки:
      cost_per_delivery * число категорий + cost_per_product * число единиц + fixed_cost
    Пустая корзина доставляется бесплатно.
    """

    cost_per_delivery: float
    cost_per_product: float
    fixed_cost: float

    def __post_init__(self):
        if min(self.cost_per_delivery, self.cost_per_product, self.fixed_cost) < 0:
            raise InvalidArgument("delivery costs should be non-negative")

    def calculate_for(self, cart: CartView) -> float:
        if cart is None:
            raise InvalidArgument("cart is required")

        deliveries = cart.number_of_categories
        units = cart.number_of_products
        if deliveries == 0 or units == 0:
            return 0

        return (
            self.cost_per_delivery * deliveries
            + self.cost_per_product * units
            + self.fixed_cost
        )

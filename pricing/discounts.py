from enum import Enum
from functools import reduce
from typing import Iterable, Iterator

from .categories import CategoryTree
from .domain import Campaign, Coupon, DiscountType, LineItem
from .ftypes import Maybe


class CampaignStacking(Enum):
    """Как объединять скидки нескольких сработавших кампаний"""

    LAST_WINS = "last_wins"  # последняя сработавшая перезаписывает предыдущие
    SUM = "sum"


## лениво отдаёт позиции, на которые распространяется кампания
def iter_eligible_items(
    items: Iterable[LineItem], campaign: Campaign, tree: CategoryTree
) -> Iterator[LineItem]:
    for item in items:
        if tree.covers(campaign.category_id, item.product.category_id):
            yield item


def campaign_discount(campaign: Campaign, eligible: Iterable[LineItem]) -> Maybe[float]:
    """
    Скидка одной кампании по подходящим позициям.
    Nothing, если суммарное количество меньше minimum_item_count.
    """
    eligible = tuple(eligible)
    eligible_count = sum(item.quantity for item in eligible)
    if eligible_count < campaign.minimum_item_count:
        return Maybe.nothing()

    if campaign.kind == DiscountType.AMOUNT:
        return Maybe.some(campaign.value * eligible_count)
    return Maybe.some(
        sum(
            item.product.price * (campaign.value / 100) * item.quantity
            for item in eligible
        )
    )


def coupon_discount(coupon: Coupon, amount: float) -> float:
    """Скидка купона относительно переданной суммы; 0, если сумма ниже порога"""
    if coupon is None or amount < coupon.minimum_order_amount:
        return 0
    if coupon.kind == DiscountType.AMOUNT:
        return coupon.value
    return amount * (coupon.value / 100)


def combine_campaign_discounts(
    discounts: Iterable[Maybe[float]], stacking: CampaignStacking
) -> float:
    """
    Сворачивает результаты кампаний в порядке применения.
    Несработавшая кампания (Nothing) не сбрасывает накопленное значение.
    """

    def last_wins(acc: float, d: Maybe[float]) -> float:
        return d.get_or_else(acc)

    def summed(acc: float, d: Maybe[float]) -> float:
        return acc + d.get_or_else(0)

    step = summed if stacking == CampaignStacking.SUM else last_wins
    return reduce(step, discounts, 0)

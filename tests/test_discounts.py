import sys
import os

sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))
import pytest
from pricing.categories import CategoryTree
from pricing.discounts import (
    CampaignStacking,
    campaign_discount,
    combine_campaign_discounts,
    coupon_discount,
    iter_eligible_items,
)
from pricing.domain import Campaign, Coupon, DiscountType, LineItem, Product
from pricing.ftypes import Maybe


@pytest.fixture
def tree():
    t = CategoryTree()
    t.add("Shoes", "shoes")
    t.add("Nike", "nike")
    t.add("Books", "books")
    t.assign_parent("nike", "shoes")
    return t


@pytest.fixture
def items():
    return (
        LineItem(Product(id="p1", title="Air", price=100, category_id="nike"), 2),
        LineItem(Product(id="p2", title="Novel", price=10, category_id="books"), 1),
        LineItem(Product(id="p3", title="Boot", price=50, category_id="shoes"), 1),
    )


def test_iter_eligible_items_is_lazy_and_filters(tree, items):
    c = Campaign(value=1, kind=DiscountType.AMOUNT, category_id="shoes", minimum_item_count=1)
    gen = iter_eligible_items(items, c, tree)
    assert next(gen).product.id == "p1"
    assert [i.product.id for i in gen] == ["p3"]


def test_campaign_discount_below_threshold_is_nothing(tree, items):
    c = Campaign(value=1, kind=DiscountType.AMOUNT, category_id="shoes", minimum_item_count=4)
    assert campaign_discount(c, iter_eligible_items(items, c, tree)).is_none()


def test_campaign_discount_rate(tree, items):
    c = Campaign(value=10, kind=DiscountType.RATE, category_id="shoes", minimum_item_count=3)
    result = campaign_discount(c, iter_eligible_items(items, c, tree))
    assert result.get_or_else(None) == pytest.approx(20 + 5)


def test_coupon_discount_threshold_is_inclusive():
    coupon = Coupon(value=10, kind=DiscountType.RATE, minimum_order_amount=200)
    assert coupon_discount(coupon, 200) == pytest.approx(20)
    assert coupon_discount(coupon, 199.99) == 0
    assert coupon_discount(None, 500) == 0


def test_combine_last_wins_ignores_nothing():
    values = (Maybe.some(10.0), Maybe.some(3.0), Maybe.nothing())
    assert combine_campaign_discounts(values, CampaignStacking.LAST_WINS) == 3.0


def test_combine_sum():
    values = (Maybe.some(10.0), Maybe.nothing(), Maybe.some(3.0))
    assert combine_campaign_discounts(values, CampaignStacking.SUM) == 13.0


def test_combine_empty_is_zero():
    assert combine_campaign_discounts((), CampaignStacking.LAST_WINS) == 0

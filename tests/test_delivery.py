import sys
import os

sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))
from dataclasses import dataclass
import pytest
from pricing.delivery import DeliveryCostCalculator
from pricing.errors import InvalidArgument


@dataclass
class StubCart:
    number_of_categories: int
    number_of_products: int


@pytest.mark.parametrize(
    "costs", [(-1, 0, 0), (0, -1, 0), (0, 0, -0.01), (-1, -1, -3)]
)
def test_negative_costs_raise(costs):
    with pytest.raises(InvalidArgument):
        DeliveryCostCalculator(*costs)


def test_calculate_for_none_raises():
    with pytest.raises(InvalidArgument):
        DeliveryCostCalculator(1, 1, 1).calculate_for(None)


@pytest.mark.parametrize(
    "costs, categories, products, expected",
    [
        ((10, 5, 2.99), 2, 3, 37.99),
        ((1, 1, 1), 1, 1, 3),
        ((1, 1, 1), 0, 1, 0),
        ((1, 1, 1), 1, 0, 0),
        ((1, 1, 1), 0, 0, 0),
    ],
)
def test_calculate_for(costs, categories, products, expected):
    calculator = DeliveryCostCalculator(*costs)
    cost = calculator.calculate_for(StubCart(categories, products))
    assert cost == pytest.approx(expected)

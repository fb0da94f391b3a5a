import os
from dataclasses import dataclass, field

from .discounts import CampaignStacking
from .errors import InvalidArgument

ROOT_DIR = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))


def stacking_from_env(default: CampaignStacking = CampaignStacking.LAST_WINS) -> CampaignStacking:
    """CART_CAMPAIGN_STACKING без учёта регистра; неизвестное значение — InvalidArgument"""
    raw = os.environ.get("CART_CAMPAIGN_STACKING", default.value).strip().lower()
    allowed = {s.value: s for s in CampaignStacking}
    if raw not in allowed:
        raise InvalidArgument(
            f"CART_CAMPAIGN_STACKING must be one of {', '.join(allowed)}, got '{raw}'"
        )
    return allowed[raw]


@dataclass(frozen=True)
class PricingConfig:
    # Paths
    SEED_PATH: str = field(
        default_factory=lambda: os.environ.get(
            "CART_SEED_PATH", os.path.join(ROOT_DIR, "data", "seed.json")
        )
    )

    # Delivery defaults (used when seed has no "delivery" section)
    COST_PER_DELIVERY: float = 5.0
    COST_PER_PRODUCT: float = 15.0
    FIXED_COST: float = 2.99

    # Campaigns
    CAMPAIGN_STACKING: CampaignStacking = field(default_factory=stacking_from_env)


config = PricingConfig()

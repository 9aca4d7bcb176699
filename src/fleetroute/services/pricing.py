"""Shared-pooling discount policy."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..config import settings

DIRECT_P2P = "Direct P2P"
HUB_SHARED_POOLING = "Hub-Shared-Pooling"
DIRECT_SHARED_POOLING = "Direct-Shared-Pooling"


@dataclass(frozen=True, slots=True)
class PricingOutcome:
    label: str
    total_cost: float
    original_cost: float
    discount: float
    savings: float


def pooling_discount(
    strategy_option: str,
    has_hub: bool,
    *,
    hub_discount: Optional[float] = None,
    direct_discount: Optional[float] = None,
) -> tuple[str, float]:
    """Label and discount fraction for a strategy option and route shape.

    The fractions are flat policy constants, not derived from matching
    shipments.
    """
    if strategy_option == "p2p":
        return DIRECT_P2P, 0.0
    if has_hub:
        return HUB_SHARED_POOLING, settings.hub_pooling_discount if hub_discount is None else hub_discount
    return DIRECT_SHARED_POOLING, settings.direct_pooling_discount if direct_discount is None else direct_discount


def apply_pooling_policy(
    strategy_option: str,
    has_hub: bool,
    cost: float,
    *,
    hub_discount: Optional[float] = None,
    direct_discount: Optional[float] = None,
) -> PricingOutcome:
    label, discount = pooling_discount(
        strategy_option, has_hub, hub_discount=hub_discount, direct_discount=direct_discount
    )
    discounted = cost * (1 - discount)
    return PricingOutcome(
        label=label,
        total_cost=round(discounted, 2),
        original_cost=round(cost, 2),
        discount=discount,
        savings=round(cost - discounted, 2),
    )


def outcome_message(outcome: PricingOutcome, hub: Optional[str]) -> str:
    if outcome.label == DIRECT_P2P:
        return "Success (Direct P2P delivery)"
    percent = round(outcome.discount * 100)
    if outcome.label == HUB_SHARED_POOLING:
        return f"Success (Hub-Shared-Pooling via {hub} - {percent}% discount applied)"
    return f"Success (Direct-Shared-Pooling - {percent}% discount applied)"

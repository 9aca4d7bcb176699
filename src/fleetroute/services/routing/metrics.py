"""Direct and hub-and-spoke route metrics for one vehicle class."""

from __future__ import annotations

import logging
from typing import Mapping, Optional

from ...config import settings
from ...data.hub_registry import all_hubs
from ...models.domain import Coordinate, VehicleClass
from ..geospatial import distance_km
from .models import RouteCandidate

logger = logging.getLogger(__name__)


def _travel_minutes(distance: float, vehicle_class: VehicleClass) -> float:
    return distance / vehicle_class.speed_kmh * 60.0


def direct_candidate(pickup: Coordinate, delivery: Coordinate, vehicle_class: VehicleClass) -> RouteCandidate:
    distance = distance_km(pickup, delivery)
    return RouteCandidate(
        strategy="direct",
        hub=None,
        route=(pickup, delivery),
        distance_km=round(distance, 2),
        time_min=round(_travel_minutes(distance, vehicle_class), 1),
        cost=round(distance * vehicle_class.cost_per_km, 2),
        feasible=distance <= vehicle_class.max_leg_distance_km,
        leg_distances_km={"direct": round(distance, 2)},
    )


def best_hub_candidate(
    pickup: Coordinate,
    delivery: Coordinate,
    vehicle_class: VehicleClass,
    *,
    hubs: Optional[Mapping[str, Coordinate]] = None,
    handling_minutes: Optional[float] = None,
) -> Optional[RouteCandidate]:
    """Shortest hub detour whose legs each fit the class range.

    The total may exceed the class's maximum leg distance; only the
    individual legs are bounded. Returns None when no hub qualifies.
    """
    hubs = all_hubs() if hubs is None else hubs
    handling = settings.hub_handling_minutes if handling_minutes is None else handling_minutes
    max_leg = vehicle_class.max_leg_distance_km

    best: Optional[tuple[str, Coordinate, float, float]] = None
    for hub_name, hub_coordinate in hubs.items():
        pickup_leg = distance_km(pickup, hub_coordinate)
        delivery_leg = distance_km(hub_coordinate, delivery)
        logger.debug(
            f"Hub {hub_name} for {vehicle_class.name}: pickup_leg={pickup_leg:.2f} "
            f"delivery_leg={delivery_leg:.2f} max_leg={max_leg}"
        )
        if pickup_leg > max_leg or delivery_leg > max_leg:
            continue
        if best is None or pickup_leg + delivery_leg < best[2] + best[3]:
            best = (hub_name, hub_coordinate, pickup_leg, delivery_leg)

    if best is None:
        return None

    hub_name, hub_coordinate, pickup_leg, delivery_leg = best
    total = pickup_leg + delivery_leg
    return RouteCandidate(
        strategy="hub",
        hub=hub_name,
        route=(pickup, hub_coordinate, delivery),
        distance_km=round(total, 2),
        time_min=round(_travel_minutes(total, vehicle_class) + handling, 1),
        cost=round(total * vehicle_class.cost_per_km, 2),
        feasible=True,
        leg_distances_km={"pickup_leg": round(pickup_leg, 2), "delivery_leg": round(delivery_leg, 2)},
    )


def best_route_for_class(
    pickup: Coordinate,
    delivery: Coordinate,
    vehicle_class: VehicleClass,
    *,
    hubs: Optional[Mapping[str, Coordinate]] = None,
    handling_minutes: Optional[float] = None,
) -> Optional[RouteCandidate]:
    """Cheaper of the feasible direct and hub candidates.

    The choice is always by cost; a direct route wins a cost tie.
    """
    candidates = [direct_candidate(pickup, delivery, vehicle_class)]
    hub_candidate = best_hub_candidate(
        pickup, delivery, vehicle_class, hubs=hubs, handling_minutes=handling_minutes
    )
    if hub_candidate is not None:
        candidates.append(hub_candidate)

    feasible = [candidate for candidate in candidates if candidate.feasible]
    if not feasible:
        logger.debug(f"No feasible route for {vehicle_class.name}")
        return None

    best = feasible[0]
    for candidate in feasible[1:]:
        if candidate.cost < best.cost:
            best = candidate
    logger.debug(
        f"Best route for {vehicle_class.name}: strategy={best.strategy} hub={best.hub} "
        f"distance={best.distance_km} cost={best.cost}"
    )
    return best

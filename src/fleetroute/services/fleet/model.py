"""Simulated fleet: seeding, capacity checks and point-to-point assignment."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, Iterable, List, Mapping, Optional, Sequence

from ...config import settings
from ...data.vehicle_catalog import get_vehicle_class
from ...models.domain import Coordinate, Hub, VehicleInstance
from ..geospatial import distance_km, path_distance_km

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class CapacitySummary:
    weight_kg: float
    volume_cm3: float
    count: int


@dataclass(slots=True)
class FleetStatus:
    total_vehicles: int
    by_class: Dict[str, int]
    by_hub: Dict[str, int]
    available_capacity: Dict[str, CapacitySummary]


def _vehicle_id(class_name: str, hub_name: str, sequence: int) -> str:
    hub_code = hub_name.upper().replace("-", "_").replace(" ", "_")
    return f"{class_name.upper()}_{hub_code}_{sequence:03d}"


def initialize_fleet(
    hubs: Iterable[Hub],
    composition: Optional[Mapping[str, int]] = None,
) -> List[VehicleInstance]:
    """Seed every hub with the configured number of instances per class.

    Order is hub by hub, then class in composition order, so repeated calls
    produce identical fleets.
    """
    composition = settings.fleet_composition if composition is None else composition
    fleet: list[VehicleInstance] = []
    for hub in hubs:
        for class_name, count in composition.items():
            vehicle_class = get_vehicle_class(class_name)
            if vehicle_class is None:
                raise ValueError(f"Unknown vehicle class '{class_name}' in fleet composition.")
            for sequence in range(1, count + 1):
                fleet.append(VehicleInstance.at_hub(_vehicle_id(class_name, hub.name, sequence), vehicle_class, hub))
    logger.debug(f"Initialized fleet with {len(fleet)} vehicles")
    return fleet


def capacity_ok(instance: VehicleInstance, weight_kg: float, volume_cm3: float) -> bool:
    return instance.remaining_weight_kg >= weight_kg and instance.remaining_volume_cm3 >= volume_cm3


def nearest_available(
    fleet: Sequence[VehicleInstance],
    vehicle_class: str,
    pickup: Coordinate,
    weight_kg: float,
    volume_cm3: float,
) -> Optional[VehicleInstance]:
    """Closest instance of ``vehicle_class`` with spare capacity; first wins ties."""

    nearest: Optional[VehicleInstance] = None
    nearest_distance = 0.0
    for instance in fleet:
        if instance.vehicle_class.name != vehicle_class:
            continue
        if not capacity_ok(instance, weight_kg, volume_cm3):
            continue
        distance = distance_km(instance.current_location, pickup)
        if nearest is None or distance < nearest_distance:
            nearest = instance
            nearest_distance = distance
    return nearest


def assign_direct(
    instance: VehicleInstance,
    pickup: Coordinate,
    delivery: Coordinate,
    weight_kg: float,
    volume_cm3: float,
) -> bool:
    """Book a point-to-point job onto ``instance``.

    Both the repositioning leg to the pickup and the loaded leg must fit the
    class range; otherwise the instance is left untouched.
    """
    max_leg = instance.vehicle_class.max_leg_distance_km
    for start, end in ((instance.current_location, pickup), (pickup, delivery)):
        if distance_km(start, end) > max_leg:
            logger.debug(f"Assignment refused for {instance.id}: leg exceeds {max_leg} km")
            return False

    instance.remaining_weight_kg -= weight_kg
    instance.remaining_volume_cm3 -= volume_cm3
    instance.current_location = delivery
    instance.assigned_route = [pickup, delivery]
    return True


def route_distance_km(instance: VehicleInstance, route: Optional[Sequence[Coordinate]] = None) -> float:
    """Distance from the instance's position through ``route`` (its assigned route by default)."""

    points = list(instance.assigned_route if route is None else route)
    if not points:
        return 0.0
    return path_distance_km([instance.current_location, *points])


def fleet_status(fleet: Sequence[VehicleInstance]) -> FleetStatus:
    by_class: dict[str, int] = {}
    by_hub: dict[str, int] = {}
    capacity: dict[str, CapacitySummary] = {}
    for instance in fleet:
        class_name = instance.vehicle_class.name
        by_class[class_name] = by_class.get(class_name, 0) + 1
        by_hub[instance.home_hub] = by_hub.get(instance.home_hub, 0) + 1
        summary = capacity.setdefault(class_name, CapacitySummary(weight_kg=0.0, volume_cm3=0.0, count=0))
        summary.weight_kg += instance.remaining_weight_kg
        summary.volume_cm3 += instance.remaining_volume_cm3
        summary.count += 1
    return FleetStatus(
        total_vehicles=len(fleet),
        by_class=by_class,
        by_hub=by_hub,
        available_capacity=capacity,
    )


def describe_instance(instance: VehicleInstance) -> dict:
    return {
        "id": instance.id,
        "vehicle_class": instance.vehicle_class.name,
        "home_hub": instance.home_hub,
        "current_location": list(instance.current_location.as_tuple()),
        "remaining_capacity": {
            "weight_kg": instance.remaining_weight_kg,
            "volume_cm3": instance.remaining_volume_cm3,
        },
    }

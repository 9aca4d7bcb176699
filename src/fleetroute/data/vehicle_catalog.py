"""Static catalog of vehicle classes."""

from __future__ import annotations

from typing import Iterable, Optional

from ..models.domain import VehicleClass

# Declaration order doubles as the tie-break for equal per-km costs.
_VEHICLE_CLASSES: tuple[VehicleClass, ...] = (
    VehicleClass(
        name="2W",
        speed_kmh=25.0,
        max_leg_distance_km=9.0,
        max_weight_kg=5.0,
        max_dimensions_cm=(30.0, 30.0, 15.0),
        cost_per_km=7.0,
    ),
    VehicleClass(
        name="Van",
        speed_kmh=35.0,
        max_leg_distance_km=30.0,
        max_weight_kg=750.0,
        max_dimensions_cm=(120.0, 100.0, 100.0),
        cost_per_km=18.0,
    ),
    VehicleClass(
        name="Tempo",
        speed_kmh=40.0,
        max_leg_distance_km=70.0,
        max_weight_kg=1200.0,
        max_dimensions_cm=(180.0, 140.0, 130.0),
        cost_per_km=25.0,
    ),
    VehicleClass(
        name="Truck",
        speed_kmh=45.0,
        max_leg_distance_km=100.0,
        max_weight_kg=5000.0,
        max_dimensions_cm=(300.0, 200.0, 200.0),
        cost_per_km=35.0,
    ),
)

_BY_NAME = {vehicle_class.name: vehicle_class for vehicle_class in _VEHICLE_CLASSES}
_DECLARATION_INDEX = {vehicle_class.name: index for index, vehicle_class in enumerate(_VEHICLE_CLASSES)}


def list_vehicle_classes() -> tuple[VehicleClass, ...]:
    """All vehicle classes in declaration order."""
    return _VEHICLE_CLASSES


def get_vehicle_class(name: str) -> Optional[VehicleClass]:
    return _BY_NAME.get(name)


def cost_order(names: Iterable[str]) -> list[str]:
    """Sort class names cheapest first; equal costs keep declaration order."""

    known = [name for name in names if name in _BY_NAME]
    return sorted(known, key=lambda name: (_BY_NAME[name].cost_per_km, _DECLARATION_INDEX[name]))

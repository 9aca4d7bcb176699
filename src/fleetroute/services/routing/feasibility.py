"""Capacity feasibility of vehicle classes for a cargo."""

from __future__ import annotations

import logging

from ...data.vehicle_catalog import list_vehicle_classes
from ...models.domain import CargoSpec, VehicleClass

logger = logging.getLogger(__name__)


def can_carry(vehicle_class: VehicleClass, cargo: CargoSpec) -> bool:
    """Weight, volume and per-axis dimension check.

    Dimensions are compared positionally (length, width, height); no rotation
    of the cargo is attempted.
    """
    max_length, max_width, max_height = vehicle_class.max_dimensions_cm
    return (
        cargo.weight_kg <= vehicle_class.max_weight_kg
        and cargo.volume_cm3 <= vehicle_class.max_volume_cm3
        and cargo.length_cm <= max_length
        and cargo.width_cm <= max_width
        and cargo.height_cm <= max_height
    )


def feasible_vehicle_classes(cargo: CargoSpec) -> tuple[str, ...]:
    """Names of the classes able to carry ``cargo``, in catalog order."""

    feasible: list[str] = []
    for vehicle_class in list_vehicle_classes():
        ok = can_carry(vehicle_class, cargo)
        logger.debug(
            f"Capacity check {vehicle_class.name}: weight={cargo.weight_kg}/{vehicle_class.max_weight_kg} "
            f"volume={cargo.volume_cm3}/{vehicle_class.max_volume_cm3} feasible={ok}"
        )
        if ok:
            feasible.append(vehicle_class.name)
    return tuple(feasible)

"""Domain models for cargo, vehicles, hubs and fleet members."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List


@dataclass(frozen=True, slots=True)
class Coordinate:
    """A (latitude, longitude) pair in decimal degrees."""

    latitude: float
    longitude: float

    def as_tuple(self) -> tuple[float, float]:
        return (self.latitude, self.longitude)


@dataclass(frozen=True, slots=True)
class CargoSpec:
    """Weight and axis-aligned dimensions of a shipment."""

    weight_kg: float
    length_cm: float
    width_cm: float
    height_cm: float

    @property
    def dimensions_cm(self) -> tuple[float, float, float]:
        return (self.length_cm, self.width_cm, self.height_cm)

    @property
    def volume_cm3(self) -> float:
        return self.length_cm * self.width_cm * self.height_cm


@dataclass(frozen=True, slots=True)
class VehicleClass:
    """Static capability and pricing profile of a vehicle type."""

    name: str
    speed_kmh: float
    max_leg_distance_km: float
    max_weight_kg: float
    max_dimensions_cm: tuple[float, float, float]
    cost_per_km: float

    @property
    def max_volume_cm3(self) -> float:
        length, width, height = self.max_dimensions_cm
        return length * width * height


@dataclass(frozen=True, slots=True)
class Hub:
    """Named transfer hub."""

    name: str
    coordinate: Coordinate


@dataclass(slots=True)
class VehicleInstance:
    """A concrete fleet member with its current position and spare capacity."""

    id: str
    vehicle_class: VehicleClass
    current_location: Coordinate
    home_hub: str
    remaining_weight_kg: float
    remaining_volume_cm3: float
    assigned_route: List[Coordinate] = field(default_factory=list)

    @classmethod
    def at_hub(cls, vehicle_id: str, vehicle_class: VehicleClass, hub: Hub) -> "VehicleInstance":
        return cls(
            id=vehicle_id,
            vehicle_class=vehicle_class,
            current_location=hub.coordinate,
            home_hub=hub.name,
            remaining_weight_kg=vehicle_class.max_weight_kg,
            remaining_volume_cm3=vehicle_class.max_volume_cm3,
        )

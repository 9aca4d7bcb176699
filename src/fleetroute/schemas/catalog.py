"""Fleet, hub and vehicle catalog schemas."""

from __future__ import annotations

from typing import Dict, Tuple

from pydantic import BaseModel


class HubModel(BaseModel):
    name: str
    coordinate: Tuple[float, float]


class VehicleClassModel(BaseModel):
    name: str
    speed_kmh: float
    max_leg_distance_km: float
    max_weight_kg: float
    max_dimensions_cm: Tuple[float, float, float]
    max_volume_cm3: float
    cost_per_km: float


class CapacitySummaryModel(BaseModel):
    weight_kg: float
    volume_cm3: float
    count: int


class FleetStatusModel(BaseModel):
    total_vehicles: int
    by_class: Dict[str, int]
    by_hub: Dict[str, int]
    available_capacity: Dict[str, CapacitySummaryModel]

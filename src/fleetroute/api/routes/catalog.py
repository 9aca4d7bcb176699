"""Hub registry and vehicle catalog endpoints."""

from __future__ import annotations

from typing import List

from fastapi import APIRouter, HTTPException, status

from ...data.hub_registry import all_hubs, get_hub
from ...data.vehicle_catalog import get_vehicle_class, list_vehicle_classes
from ...models.domain import VehicleClass
from ...schemas.catalog import HubModel, VehicleClassModel

router = APIRouter(tags=["catalog"])


def _vehicle_model(vehicle_class: VehicleClass) -> VehicleClassModel:
    return VehicleClassModel(
        name=vehicle_class.name,
        speed_kmh=vehicle_class.speed_kmh,
        max_leg_distance_km=vehicle_class.max_leg_distance_km,
        max_weight_kg=vehicle_class.max_weight_kg,
        max_dimensions_cm=vehicle_class.max_dimensions_cm,
        max_volume_cm3=vehicle_class.max_volume_cm3,
        cost_per_km=vehicle_class.cost_per_km,
    )


@router.get("/hubs", response_model=List[HubModel])
def list_hubs() -> List[HubModel]:
    return [HubModel(name=name, coordinate=coordinate.as_tuple()) for name, coordinate in all_hubs().items()]


@router.get("/hubs/{name}", response_model=HubModel)
def hub_detail(name: str) -> HubModel:
    coordinate = get_hub(name)
    if coordinate is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Hub '{name}' not found")
    return HubModel(name=name, coordinate=coordinate.as_tuple())


@router.get("/vehicles", response_model=List[VehicleClassModel])
def list_vehicles() -> List[VehicleClassModel]:
    return [_vehicle_model(vehicle_class) for vehicle_class in list_vehicle_classes()]


@router.get("/vehicles/{name}", response_model=VehicleClassModel)
def vehicle_detail(name: str) -> VehicleClassModel:
    vehicle_class = get_vehicle_class(name)
    if vehicle_class is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Vehicle class '{name}' not found")
    return _vehicle_model(vehicle_class)

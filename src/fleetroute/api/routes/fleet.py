"""Simulated fleet endpoints."""

from __future__ import annotations

from dataclasses import asdict

from fastapi import APIRouter, status

from ...schemas.catalog import FleetStatusModel
from ...services.quotes.service import current_fleet_status, reset_shared_fleet

router = APIRouter(prefix="/fleet", tags=["fleet"])


@router.get("/status", response_model=FleetStatusModel, status_code=status.HTTP_200_OK)
def fleet_status() -> FleetStatusModel:
    return FleetStatusModel(**current_fleet_status())


@router.post("/reset", response_model=FleetStatusModel, status_code=status.HTTP_200_OK)
def reset_fleet() -> FleetStatusModel:
    """Re-seed the shared fleet, discarding all simulated assignments."""
    return FleetStatusModel(**asdict(reset_shared_fleet()))

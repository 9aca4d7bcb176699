"""Quote request/response schemas."""

from __future__ import annotations

from typing import Dict, List, Literal, Optional, Tuple

from pydantic import BaseModel, Field


class QuoteRequest(BaseModel):
    pickup: Optional[Tuple[float, float]] = Field(default=None, description="Pickup as [latitude, longitude].")
    delivery: Optional[Tuple[float, float]] = Field(default=None, description="Delivery as [latitude, longitude].")
    pickup_address: Optional[str] = Field(default=None, description="Geocoded when no pickup coordinate is given.")
    delivery_address: Optional[str] = Field(default=None, description="Geocoded when no delivery coordinate is given.")
    load_weight_kg: float
    load_length_cm: float
    load_width_cm: float
    load_height_cm: float
    strategy: Literal["auto", "p2p"] = "auto"
    optimize_by: Literal["cost", "time"] = "cost"
    vehicle_preference: Optional[str] = None
    persist: Optional[bool] = Field(default=None, description="Write summary.json and route.csv for this quote.")


class QuoteResponse(BaseModel):
    status: str
    message: str
    strategy: Optional[str] = None
    route_strategy: Optional[str] = None
    hub: Optional[str] = None
    vehicle: Optional[str] = None
    vehicle_instance_id: Optional[str] = None
    distance_km: Optional[float] = None
    time_min: Optional[float] = None
    cost_inr: Optional[float] = None
    original_cost_inr: Optional[float] = None
    savings_inr: Optional[float] = None
    pooling_discount: Optional[float] = None
    distances_km: Optional[Dict[str, float]] = None
    optimal_route: Optional[List[Tuple[float, float]]] = None
    feasible_vehicles: List[str]
    pickup: Tuple[float, float]
    delivery: Tuple[float, float]
    cargo: dict
    selected_vehicle_details: Optional[dict] = None
    algorithm_details: dict
    errors: List[str] = Field(default_factory=list)
    output_dir: Optional[str] = None

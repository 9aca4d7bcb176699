"""Quote optimisation: vehicle feasibility, route selection, fleet binding and pricing."""

from __future__ import annotations

import logging
import math
from typing import List, Mapping, Optional, Sequence, Union

from ...data.hub_registry import all_hubs
from ...data.vehicle_catalog import cost_order, get_vehicle_class
from ...models.domain import CargoSpec, Coordinate, VehicleInstance
from ..fleet.repository import FleetRepository
from ..geospatial import is_finite_coordinate
from ..pricing import apply_pooling_policy, outcome_message
from .feasibility import feasible_vehicle_classes
from .metrics import best_route_for_class
from .models import OptimizationResult, OptimizationStatus, RouteCandidate

logger = logging.getLogger(__name__)

STRATEGY_OPTIONS = ("auto", "p2p")
OPTIMIZE_BY_OPTIONS = ("cost", "time")

FleetSource = Union[FleetRepository, List[VehicleInstance]]


def validate_request(
    pickup: Coordinate,
    delivery: Coordinate,
    cargo: CargoSpec,
    strategy: str,
    optimize_by: str,
) -> list[str]:
    """Return a list of problems with the request; empty when it is well formed."""

    errors: list[str] = []
    for label, point in (("pickup", pickup), ("delivery", delivery)):
        if not is_finite_coordinate(point):
            errors.append(f"{label} coordinate must be finite")
    for label, value in (
        ("weight_kg", cargo.weight_kg),
        ("length_cm", cargo.length_cm),
        ("width_cm", cargo.width_cm),
        ("height_cm", cargo.height_cm),
    ):
        if not math.isfinite(value) or value <= 0:
            errors.append(f"{label} must be a positive number")
    if strategy not in STRATEGY_OPTIONS:
        errors.append(f"strategy must be one of {', '.join(STRATEGY_OPTIONS)}")
    if optimize_by not in OPTIMIZE_BY_OPTIONS:
        errors.append(f"optimize_by must be one of {', '.join(OPTIMIZE_BY_OPTIONS)}")
    return errors


def evaluation_order(feasible: Sequence[str], vehicle_preference: Optional[str]) -> list[str]:
    ordered = cost_order(feasible)
    if vehicle_preference and vehicle_preference in feasible:
        return [vehicle_preference] + [name for name in ordered if name != vehicle_preference]
    return ordered


def _objective(candidate: RouteCandidate, optimize_by: str) -> float:
    return candidate.cost if optimize_by == "cost" else candidate.time_min


def _cargo_summary(cargo: CargoSpec) -> dict:
    return {
        "weight_kg": cargo.weight_kg,
        "dimensions_cm": list(cargo.dimensions_cm),
        "volume_cm3": cargo.volume_cm3,
    }


def optimize(
    pickup: Coordinate,
    delivery: Coordinate,
    cargo: CargoSpec,
    strategy: str = "auto",
    optimize_by: str = "cost",
    vehicle_preference: Optional[str] = None,
    fleet: Optional[FleetSource] = None,
    *,
    hubs: Optional[Mapping[str, Coordinate]] = None,
) -> OptimizationResult:
    """Select the vehicle class, route and price for one shipment.

    A preferred class wins whenever it has any feasible route; otherwise the
    class minimising ``optimize_by`` is chosen, earlier classes winning ties.
    When a fleet is given, the nearest instance with spare capacity is bound
    on a best-effort basis and, for ``p2p``, the job is booked onto it.
    """
    hubs = all_hubs() if hubs is None else hubs
    details: dict = {
        "optimized_by": optimize_by,
        "user_preference": vehicle_preference,
        "hubs_considered": len(hubs),
        "evaluated_vehicles": [],
        "attempted": {},
        "fleet_binding": "not_requested",
        "fleet_utilization": None,
    }

    errors = validate_request(pickup, delivery, cargo, strategy, optimize_by)
    if errors:
        logger.info(f"Rejected quote request: {'; '.join(errors)}")
        return OptimizationResult(
            status=OptimizationStatus.INVALID_INPUT,
            message=f"Invalid request: {'; '.join(errors)}",
            feasible_vehicles=(),
            cargo=_cargo_summary(cargo),
            algorithm_details=details,
            errors=tuple(errors),
        )

    cargo_summary = _cargo_summary(cargo)
    feasible = feasible_vehicle_classes(cargo)
    if not feasible:
        logger.info("No vehicle class can carry the cargo")
        return OptimizationResult(
            status=OptimizationStatus.INFEASIBLE_CARGO,
            message="No vehicle can handle this cargo size/weight",
            feasible_vehicles=(),
            cargo=cargo_summary,
            algorithm_details=details,
        )

    order = evaluation_order(feasible, vehicle_preference)
    details["evaluated_vehicles"] = order
    logger.debug(f"Vehicle evaluation order: {order}")

    candidates: dict[str, RouteCandidate] = {}
    for class_name in order:
        vehicle_class = get_vehicle_class(class_name)
        candidate = best_route_for_class(pickup, delivery, vehicle_class, hubs=hubs)
        details["attempted"][class_name] = candidate.strategy if candidate else None
        if candidate is not None:
            candidates[class_name] = candidate

    if not candidates:
        logger.info(f"No feasible route for any of {order}")
        return OptimizationResult(
            status=OptimizationStatus.NO_FEASIBLE_ROUTE,
            message="No feasible route found for any vehicle",
            feasible_vehicles=feasible,
            cargo=cargo_summary,
            algorithm_details=details,
        )

    if vehicle_preference in candidates:
        selected = vehicle_preference
    else:
        selected = None
        for class_name in order:
            candidate = candidates.get(class_name)
            if candidate is None:
                continue
            if selected is None or _objective(candidate, optimize_by) < _objective(candidates[selected], optimize_by):
                selected = class_name
    best = candidates[selected]

    instance_id: Optional[str] = None
    instance_details: Optional[dict] = None
    if fleet is not None:
        repository = fleet if isinstance(fleet, FleetRepository) else FleetRepository.over_list(fleet)
        reservation = repository.reserve(
            selected,
            pickup,
            delivery,
            cargo.weight_kg,
            cargo.volume_cm3,
            assign=strategy == "p2p",
        )
        details["fleet_binding"] = reservation.outcome
        details["fleet_utilization"] = repository.utilization(feasible, cargo.weight_kg, cargo.volume_cm3)
        if reservation.outcome == "bound":
            instance_id = reservation.instance_id
            instance_details = reservation.details

    pricing = apply_pooling_policy(strategy, best.hub is not None, best.cost)
    logger.info(
        f"Selected {selected} ({best.strategy}, hub={best.hub}) cost={pricing.total_cost} "
        f"original={pricing.original_cost} vehicle={instance_id}"
    )
    return OptimizationResult(
        status=OptimizationStatus.SUCCESS,
        message=outcome_message(pricing, best.hub),
        feasible_vehicles=feasible,
        cargo=cargo_summary,
        algorithm_details=details,
        selected_vehicle=selected,
        vehicle_instance_id=instance_id,
        strategy=pricing.label,
        route_strategy=best.strategy,
        hub=best.hub,
        distances_km=dict(best.leg_distances_km),
        total_distance_km=best.distance_km,
        total_time_min=best.time_min,
        total_cost=pricing.total_cost,
        original_cost=pricing.original_cost,
        pooling_discount=pricing.discount,
        savings=pricing.savings,
        route=best.route,
        selected_vehicle_details=instance_details,
    )

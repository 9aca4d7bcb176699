"""Quote orchestration service."""

from __future__ import annotations

import logging
import threading
from dataclasses import asdict
from typing import Optional

from ...config import settings
from ...data.hub_registry import load_hubs
from ...models.domain import CargoSpec, Coordinate
from ...persistence.filesystem import FileStorage
from ...schemas.quotes import QuoteRequest, QuoteResponse
from ..fleet.model import FleetStatus, initialize_fleet
from ..fleet.repository import FleetRepository
from ..geocoding import GoogleGeocoder
from ..outputs.quote_formatter import quote_result_to_csv, quote_result_to_json
from ..routing.models import OptimizationResult, to_plain
from ..routing.optimizer import optimize

logger = logging.getLogger(__name__)

_shared_fleet: Optional[FleetRepository] = None
_shared_fleet_lock = threading.Lock()


def get_shared_fleet() -> FleetRepository:
    """Process-wide fleet, seeded from the hub registry on first use."""
    global _shared_fleet
    with _shared_fleet_lock:
        if _shared_fleet is None:
            _shared_fleet = FleetRepository.seeded(load_hubs())
        return _shared_fleet


def reset_shared_fleet() -> FleetStatus:
    repository = get_shared_fleet()
    repository.replace(initialize_fleet(load_hubs()))
    logger.info(f"Shared fleet re-seeded with {len(repository)} vehicles")
    return repository.status()


def _fleet_for_request() -> FleetRepository:
    if settings.shared_fleet:
        return get_shared_fleet()
    return FleetRepository.seeded(load_hubs())


def _resolve_point(label: str, point: Optional[tuple[float, float]], address: Optional[str]) -> Coordinate:
    if point is not None:
        return Coordinate(point[0], point[1])
    if not address or not address.strip():
        raise ValueError(f"Either {label} coordinates or {label}_address is required.")
    return GoogleGeocoder().geocode(address)


def _persist(result: OptimizationResult, pickup: Coordinate, delivery: Coordinate) -> str:
    storage = FileStorage()
    run_dir = storage.make_run_directory(prefix=f"quote_{result.selected_vehicle or 'none'}")
    summary = quote_result_to_json(result)
    summary["pickup"] = list(pickup.as_tuple())
    summary["delivery"] = list(delivery.as_tuple())
    storage.write_json(run_dir / "summary.json", summary)
    storage.write_csv(run_dir / "route.csv", quote_result_to_csv(result))
    return str(run_dir)


def _to_response(
    result: OptimizationResult,
    pickup: Coordinate,
    delivery: Coordinate,
    output_dir: Optional[str],
) -> QuoteResponse:
    return QuoteResponse(
        status=result.status.value,
        message=result.message,
        strategy=result.strategy,
        route_strategy=result.route_strategy,
        hub=result.hub,
        vehicle=result.selected_vehicle,
        vehicle_instance_id=result.vehicle_instance_id,
        distance_km=result.total_distance_km,
        time_min=result.total_time_min,
        cost_inr=result.total_cost,
        original_cost_inr=result.original_cost,
        savings_inr=result.savings,
        pooling_discount=result.pooling_discount,
        distances_km=to_plain(result.distances_km),
        optimal_route=[point.as_tuple() for point in result.route] if result.route else None,
        feasible_vehicles=list(result.feasible_vehicles),
        pickup=pickup.as_tuple(),
        delivery=delivery.as_tuple(),
        cargo=to_plain(result.cargo),
        selected_vehicle_details=to_plain(result.selected_vehicle_details),
        algorithm_details=to_plain(result.algorithm_details),
        errors=list(result.errors),
        output_dir=output_dir,
    )


def request_quote(payload: QuoteRequest) -> QuoteResponse:
    pickup = _resolve_point("pickup", payload.pickup, payload.pickup_address)
    delivery = _resolve_point("delivery", payload.delivery, payload.delivery_address)

    cargo = CargoSpec(
        weight_kg=payload.load_weight_kg,
        length_cm=payload.load_length_cm,
        width_cm=payload.load_width_cm,
        height_cm=payload.load_height_cm,
    )
    result = optimize(
        pickup,
        delivery,
        cargo,
        strategy=payload.strategy,
        optimize_by=payload.optimize_by,
        vehicle_preference=payload.vehicle_preference,
        fleet=_fleet_for_request(),
    )

    output_dir: Optional[str] = None
    persist = settings.persist_quotes if payload.persist is None else payload.persist
    if persist:
        try:
            output_dir = _persist(result, pickup, delivery)
        except OSError as exc:
            logger.warning(f"Failed to persist quote outputs: {exc}")

    return _to_response(result, pickup, delivery, output_dir)


def current_fleet_status() -> dict:
    return asdict(get_shared_fleet().status())

"""Serializers for quote outputs."""

from __future__ import annotations

import csv
import io

from ..routing.models import OptimizationResult, to_plain


def quote_result_to_json(result: OptimizationResult) -> dict:
    return {
        "status": result.status.value,
        "message": result.message,
        "feasible_vehicles": list(result.feasible_vehicles),
        "selected_vehicle": result.selected_vehicle,
        "vehicle_instance_id": result.vehicle_instance_id,
        "strategy": result.strategy,
        "route_strategy": result.route_strategy,
        "hub": result.hub,
        "distances_km": to_plain(result.distances_km),
        "total_distance_km": result.total_distance_km,
        "total_time_min": result.total_time_min,
        "total_cost": result.total_cost,
        "original_cost": result.original_cost,
        "pooling_discount": result.pooling_discount,
        "savings": result.savings,
        "route": [list(point.as_tuple()) for point in result.route] if result.route else None,
        "cargo": to_plain(result.cargo),
        "selected_vehicle_details": to_plain(result.selected_vehicle_details),
        "algorithm_details": to_plain(result.algorithm_details),
        "errors": list(result.errors),
    }


def _point_kind(index: int, count: int) -> str:
    if index == 0:
        return "pickup"
    if index == count - 1:
        return "delivery"
    return "hub"


def quote_result_to_csv(result: OptimizationResult) -> str:
    buffer = io.StringIO()
    fieldnames = ["sequence", "kind", "label", "latitude", "longitude"]
    writer = csv.DictWriter(buffer, fieldnames=fieldnames)
    writer.writeheader()
    points = result.route or ()
    for index, point in enumerate(points):
        kind = _point_kind(index, len(points))
        writer.writerow(
            {
                "sequence": index,
                "kind": kind,
                "label": result.hub if kind == "hub" else kind,
                "latitude": point.latitude,
                "longitude": point.longitude,
            }
        )
    return buffer.getvalue()

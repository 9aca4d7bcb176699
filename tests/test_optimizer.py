import math
from dataclasses import FrozenInstanceError

import pytest

from src.fleetroute.data.hub_registry import load_hubs
from src.fleetroute.models.domain import CargoSpec, Coordinate
from src.fleetroute.services.fleet.model import initialize_fleet
from src.fleetroute.services.fleet.repository import FleetRepository
from src.fleetroute.services.routing.models import OptimizationStatus
from src.fleetroute.services.routing.optimizer import evaluation_order, optimize

PICKUP = Coordinate(28.70, 77.10)
DELIVERY = Coordinate(28.55, 77.25)
MEDIUM_CARGO = CargoSpec(weight_kg=50, length_cm=80, width_cm=60, height_cm=60)


def test_auto_cost_quote_uses_direct_van_with_direct_discount():
    result = optimize(PICKUP, DELIVERY, MEDIUM_CARGO, strategy="auto", optimize_by="cost")

    assert result.status is OptimizationStatus.SUCCESS
    assert result.success
    assert result.feasible_vehicles == ("Van", "Tempo", "Truck")
    assert result.selected_vehicle == "Van"
    assert result.route_strategy == "direct"
    assert result.hub is None
    assert result.strategy == "Direct-Shared-Pooling"
    assert result.pooling_discount == 0.15
    assert result.total_cost == pytest.approx(result.original_cost * 0.85, abs=0.01)
    assert result.savings == pytest.approx(result.original_cost * 0.15, abs=0.01)
    assert result.route == (PICKUP, DELIVERY)
    assert 15 < result.total_distance_km < 30
    assert result.distances_km == {"direct": result.total_distance_km}
    assert "15% discount" in result.message
    assert result.vehicle_instance_id is None
    assert result.algorithm_details["fleet_binding"] == "not_requested"
    assert result.algorithm_details["hubs_considered"] == len(load_hubs())


def test_p2p_never_discounts():
    result = optimize(PICKUP, DELIVERY, MEDIUM_CARGO, strategy="p2p")

    assert result.strategy == "Direct P2P"
    assert result.total_cost == result.original_cost
    assert result.savings == 0.0
    assert result.message == "Success (Direct P2P delivery)"


def test_optimize_by_time_prefers_faster_class():
    result = optimize(PICKUP, DELIVERY, MEDIUM_CARGO, optimize_by="time")

    assert result.selected_vehicle == "Truck"


def test_auto_hub_route_gets_hub_discount():
    hubs = {"mid": Coordinate(0.0, 0.25)}

    result = optimize(Coordinate(0.0, 0.0), Coordinate(0.0, 0.5), MEDIUM_CARGO, hubs=hubs)

    assert result.selected_vehicle == "Van"
    assert result.route_strategy == "hub"
    assert result.hub == "mid"
    assert result.strategy == "Hub-Shared-Pooling"
    assert result.pooling_discount == 0.25
    assert result.total_cost == pytest.approx(result.original_cost * 0.75, abs=0.01)
    assert set(result.distances_km) == {"pickup_leg", "delivery_leg"}
    assert len(result.route) == 3
    assert "via mid - 25% discount" in result.message


def test_preference_overrides_cheaper_class():
    result = optimize(PICKUP, DELIVERY, MEDIUM_CARGO, vehicle_preference="Truck")

    assert result.selected_vehicle == "Truck"
    assert result.algorithm_details["evaluated_vehicles"][0] == "Truck"
    assert result.total_cost == pytest.approx(result.original_cost * 0.85, abs=0.01)


def test_preference_ignored_when_infeasible_for_cargo():
    result = optimize(PICKUP, DELIVERY, MEDIUM_CARGO, vehicle_preference="2W")

    assert result.selected_vehicle == "Van"
    assert evaluation_order(result.feasible_vehicles, "2W") == ["Van", "Tempo", "Truck"]


def test_infeasible_cargo_returns_failure_value():
    cargo = CargoSpec(weight_kg=6000, length_cm=400, width_cm=300, height_cm=300)

    result = optimize(PICKUP, DELIVERY, cargo)

    assert result.status is OptimizationStatus.INFEASIBLE_CARGO
    assert result.feasible_vehicles == ()
    assert result.message == "No vehicle can handle this cargo size/weight"
    assert result.total_cost is None
    assert result.route is None


def test_far_apart_points_have_no_feasible_route():
    result = optimize(PICKUP, Coordinate(30.5, 77.10), MEDIUM_CARGO)

    assert result.status is OptimizationStatus.NO_FEASIBLE_ROUTE
    assert result.feasible_vehicles == ("Van", "Tempo", "Truck")
    assert result.message == "No feasible route found for any vehicle"
    assert result.algorithm_details["attempted"] == {"Van": None, "Tempo": None, "Truck": None}


@pytest.mark.parametrize(
    "pickup, cargo",
    [
        (PICKUP, CargoSpec(weight_kg=0, length_cm=10, width_cm=10, height_cm=10)),
        (PICKUP, CargoSpec(weight_kg=5, length_cm=-1, width_cm=10, height_cm=10)),
        (Coordinate(math.nan, 77.1), MEDIUM_CARGO),
        (Coordinate(28.7, math.inf), MEDIUM_CARGO),
    ],
)
def test_invalid_input_is_distinct_failure(pickup, cargo):
    result = optimize(pickup, DELIVERY, cargo)

    assert result.status is OptimizationStatus.INVALID_INPUT
    assert result.errors
    assert result.message.startswith("Invalid request")


def test_unknown_strategy_is_invalid_input():
    result = optimize(PICKUP, DELIVERY, MEDIUM_CARGO, strategy="teleport")

    assert result.status is OptimizationStatus.INVALID_INPUT


def test_p2p_binds_and_assigns_nearest_vehicle():
    fleet = initialize_fleet(load_hubs())

    result = optimize(PICKUP, DELIVERY, MEDIUM_CARGO, strategy="p2p", fleet=fleet)

    assert result.vehicle_instance_id is not None
    assert result.vehicle_instance_id.startswith("VAN_")
    assert result.algorithm_details["fleet_binding"] == "bound"
    bound = next(v for v in fleet if v.id == result.vehicle_instance_id)
    assert bound.current_location == DELIVERY
    assert bound.remaining_weight_kg == 700
    assert result.selected_vehicle_details["remaining_capacity"]["weight_kg"] == 700
    assert result.algorithm_details["fleet_utilization"]["total_fleet"] == len(fleet)


def test_auto_binds_without_assigning():
    repository = FleetRepository.seeded(load_hubs())

    result = optimize(PICKUP, DELIVERY, MEDIUM_CARGO, strategy="auto", fleet=repository)

    assert result.vehicle_instance_id is not None
    assert repository.status().available_capacity["Van"].weight_kg == 750 * 3 * len(load_hubs())


def test_exhausted_fleet_does_not_fail_optimization():
    fleet = initialize_fleet(load_hubs(), {"Van": 1})
    for vehicle in fleet:
        vehicle.remaining_weight_kg = 0

    result = optimize(PICKUP, DELIVERY, MEDIUM_CARGO, fleet=fleet)

    assert result.success
    assert result.vehicle_instance_id is None
    assert result.algorithm_details["fleet_binding"] == "exhausted"


def test_result_contents_are_read_only():
    fleet = initialize_fleet(load_hubs())
    result = optimize(PICKUP, DELIVERY, MEDIUM_CARGO, strategy="p2p", fleet=fleet)

    with pytest.raises(FrozenInstanceError):
        result.total_cost = 0.0
    with pytest.raises(AttributeError):
        result.algorithm_details["evaluated_vehicles"].append("2W")
    with pytest.raises(TypeError):
        result.algorithm_details["fleet_binding"] = "exhausted"
    with pytest.raises(TypeError):
        result.cargo["weight_kg"] = 1
    with pytest.raises(TypeError):
        result.distances_km["direct"] = 0.0
    with pytest.raises(TypeError):
        result.selected_vehicle_details["remaining_capacity"]["weight_kg"] = 0
    assert result.algorithm_details["evaluated_vehicles"] == ("Van", "Tempo", "Truck")

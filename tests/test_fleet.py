import threading
import time

from src.fleetroute.data.vehicle_catalog import get_vehicle_class
from src.fleetroute.models.domain import CargoSpec, Coordinate, Hub, VehicleInstance
from src.fleetroute.services.fleet import model as fleet_model
from src.fleetroute.services.fleet.model import (
    assign_direct,
    capacity_ok,
    fleet_status,
    initialize_fleet,
    nearest_available,
    route_distance_km,
)
from src.fleetroute.services.fleet.repository import FleetRepository
from src.fleetroute.services.routing.optimizer import optimize

HUBS = (
    Hub(name="alpha", coordinate=Coordinate(0.0, 0.0)),
    Hub(name="micro-beta", coordinate=Coordinate(0.0, 0.1)),
)


def _van(vehicle_id: str, location: Coordinate) -> VehicleInstance:
    return VehicleInstance.at_hub(vehicle_id, get_vehicle_class("Van"), Hub(name="alpha", coordinate=location))


def test_initialize_fleet_is_deterministic_with_unique_ids():
    composition = {"Van": 3, "Tempo": 2, "Truck": 1, "2W": 4}

    fleet = initialize_fleet(HUBS, composition)
    again = initialize_fleet(HUBS, composition)

    assert len(fleet) == 20
    assert [v.id for v in fleet] == [v.id for v in again]
    assert len({v.id for v in fleet}) == len(fleet)
    assert fleet[0].id == "VAN_ALPHA_001"
    assert "2W_MICRO_BETA_004" in {v.id for v in fleet}
    assert all(v.remaining_weight_kg == v.vehicle_class.max_weight_kg for v in fleet)


def test_capacity_ok_checks_weight_and_volume():
    van = _van("V1", Coordinate(0.0, 0.0))

    assert capacity_ok(van, 750, 1_200_000)
    assert not capacity_ok(van, 751, 10)
    assert not capacity_ok(van, 10, 1_200_001)


def test_nearest_available_prefers_closest_then_first():
    far = _van("FAR", Coordinate(0.0, 0.2))
    near_a = _van("NEAR_A", Coordinate(0.0, 0.05))
    near_b = _van("NEAR_B", Coordinate(0.0, 0.05))
    full = _van("FULL", Coordinate(0.0, 0.0))
    full.remaining_weight_kg = 0
    pickup = Coordinate(0.0, 0.0)

    chosen = nearest_available([far, full, near_a, near_b], "Van", pickup, 10, 1000)

    assert chosen is near_a
    assert nearest_available([far], "Truck", pickup, 10, 1000) is None


def test_assign_direct_updates_instance():
    van = _van("V1", Coordinate(0.0, 0.0))
    pickup = Coordinate(0.0, 0.05)
    delivery = Coordinate(0.0, 0.2)

    assert assign_direct(van, pickup, delivery, 100, 50_000)
    assert van.remaining_weight_kg == 650
    assert van.remaining_volume_cm3 == 1_150_000
    assert van.current_location == delivery
    assert van.assigned_route == [pickup, delivery]


def test_assign_direct_refuses_out_of_range_leg_without_mutation():
    van = _van("V1", Coordinate(0.0, 0.0))
    pickup = Coordinate(0.0, 0.05)
    delivery = Coordinate(0.0, 0.5)

    assert not assign_direct(van, pickup, delivery, 100, 50_000)
    assert van.remaining_weight_kg == 750
    assert van.current_location == Coordinate(0.0, 0.0)
    assert van.assigned_route == []


def test_route_distance_and_fleet_status():
    fleet = initialize_fleet(HUBS, {"Van": 2, "Truck": 1})
    van = fleet[0]

    assert route_distance_km(van) == 0.0
    assert route_distance_km(van, [Coordinate(0.0, 0.1)]) > 0

    status = fleet_status(fleet)

    assert status.total_vehicles == 6
    assert status.by_class == {"Van": 4, "Truck": 2}
    assert status.by_hub == {"alpha": 3, "micro-beta": 3}
    assert status.available_capacity["Van"].weight_kg == 4 * 750
    assert status.available_capacity["Truck"].count == 2


def test_repository_never_double_books_last_capacity():
    van = _van("ONLY", Coordinate(0.0, 0.0))
    repository = FleetRepository([van])
    pickup = Coordinate(0.0, 0.01)
    delivery = Coordinate(0.0, 0.02)
    outcomes: list[str] = []

    def book():
        reservation = repository.reserve("Van", pickup, delivery, 500, 1000, assign=True)
        outcomes.append(reservation.outcome)

    threads = [threading.Thread(target=book) for _ in range(8)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert outcomes.count("bound") == 1
    assert outcomes.count("exhausted") == 7
    assert van.remaining_weight_kg == 250


def test_repository_reports_refused_assignment():
    van = _van("V1", Coordinate(0.0, 0.0))
    repository = FleetRepository([van])

    reservation = repository.reserve("Van", Coordinate(0.0, 0.5), Coordinate(0.0, 0.6), 10, 10, assign=True)

    assert reservation.outcome == "assignment_refused"
    assert reservation.instance_id is None
    assert van.remaining_weight_kg == 750


def test_optimize_over_shared_list_books_capacity_once(monkeypatch):
    fleet = initialize_fleet(HUBS[:1], {"Van": 1})
    original_distance = fleet_model.distance_km

    def slow_distance(a, b):
        time.sleep(0.01)
        return original_distance(a, b)

    monkeypatch.setattr(fleet_model, "distance_km", slow_distance)
    cargo = CargoSpec(weight_kg=500, length_cm=80, width_cm=60, height_cm=60)
    hubs = {hub.name: hub.coordinate for hub in HUBS}
    bound_ids: list = []

    def quote():
        result = optimize(
            Coordinate(0.0, 0.01),
            Coordinate(0.0, 0.05),
            cargo,
            strategy="p2p",
            fleet=fleet,
            hubs=hubs,
        )
        bound_ids.append(result.vehicle_instance_id)

    threads = [threading.Thread(target=quote) for _ in range(4)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert bound_ids.count("VAN_ALPHA_001") == 1
    assert bound_ids.count(None) == 3
    assert fleet[0].remaining_weight_kg == 250

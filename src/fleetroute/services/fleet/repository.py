"""Lock-guarded fleet ownership for concurrent quoting."""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from typing import Iterable, List, Literal, Mapping, Optional

from ...models.domain import Coordinate, Hub, VehicleInstance
from .model import (
    FleetStatus,
    assign_direct,
    capacity_ok,
    describe_instance,
    fleet_status,
    initialize_fleet,
    nearest_available,
)

logger = logging.getLogger(__name__)

BindingOutcome = Literal["bound", "exhausted", "assignment_refused"]

# Serialises every repository built over a caller-owned list, so two callers
# handing in the same list never book the same capacity.
_LIST_FLEET_LOCK = threading.Lock()


@dataclass(slots=True)
class Reservation:
    outcome: BindingOutcome
    instance_id: Optional[str] = None
    assigned: bool = False
    details: Optional[dict] = None


class FleetRepository:
    """Owns a list of vehicle instances and serialises lookups with mutations.

    ``reserve`` performs the nearest-instance lookup and the optional
    assignment under one lock, so two concurrent quotes never book the same
    spare capacity twice.
    """

    def __init__(self, instances: List[VehicleInstance], lock: Optional[threading.Lock] = None) -> None:
        self._instances = instances
        self._lock = lock if lock is not None else threading.Lock()

    @classmethod
    def over_list(cls, instances: List[VehicleInstance]) -> "FleetRepository":
        """Wrap a caller-owned list; all such wrappers share one process-wide lock."""
        return cls(instances, lock=_LIST_FLEET_LOCK)

    @classmethod
    def seeded(cls, hubs: Iterable[Hub], composition: Optional[Mapping[str, int]] = None) -> "FleetRepository":
        return cls(initialize_fleet(hubs, composition))

    def __len__(self) -> int:
        return len(self._instances)

    def reserve(
        self,
        vehicle_class: str,
        pickup: Coordinate,
        delivery: Coordinate,
        weight_kg: float,
        volume_cm3: float,
        *,
        assign: bool,
    ) -> Reservation:
        with self._lock:
            instance = nearest_available(self._instances, vehicle_class, pickup, weight_kg, volume_cm3)
            if instance is None:
                logger.warning(f"No {vehicle_class} with spare capacity for {weight_kg} kg / {volume_cm3} cm3")
                return Reservation(outcome="exhausted")
            if assign and not assign_direct(instance, pickup, delivery, weight_kg, volume_cm3):
                logger.warning(f"Vehicle {instance.id} cannot reach the job within its range")
                return Reservation(outcome="assignment_refused", details=describe_instance(instance))
            return Reservation(
                outcome="bound",
                instance_id=instance.id,
                assigned=assign,
                details=describe_instance(instance),
            )

    def utilization(self, feasible_classes: Iterable[str], weight_kg: float, volume_cm3: float) -> dict:
        names = set(feasible_classes)
        with self._lock:
            feasible = [instance for instance in self._instances if instance.vehicle_class.name in names]
            available = [instance for instance in feasible if capacity_ok(instance, weight_kg, volume_cm3)]
            return {
                "total_fleet": len(self._instances),
                "feasible_vehicles": len(feasible),
                "available_vehicles": len(available),
            }

    def status(self) -> FleetStatus:
        with self._lock:
            return fleet_status(self._instances)

    def replace(self, instances: List[VehicleInstance]) -> None:
        with self._lock:
            self._instances = instances

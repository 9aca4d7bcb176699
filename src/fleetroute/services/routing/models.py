"""Routing domain models."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any, Literal, Mapping, Optional

from ...models.domain import Coordinate

RouteStrategy = Literal["direct", "hub"]
StrategyOption = Literal["auto", "p2p"]
OptimizeBy = Literal["cost", "time"]


@dataclass(frozen=True, slots=True)
class RouteCandidate:
    strategy: RouteStrategy
    hub: Optional[str]
    route: tuple[Coordinate, ...]
    distance_km: float
    time_min: float
    cost: float
    feasible: bool
    leg_distances_km: dict[str, float] = field(default_factory=dict)


def freeze(value: Any) -> Any:
    """Read-only view of nested mappings and lists."""
    if isinstance(value, Mapping):
        return MappingProxyType({key: freeze(item) for key, item in value.items()})
    if isinstance(value, (list, tuple)):
        return tuple(freeze(item) for item in value)
    return value


def to_plain(value: Any) -> Any:
    """JSON-ready copy of a frozen value."""
    if isinstance(value, Mapping):
        return {key: to_plain(item) for key, item in value.items()}
    if isinstance(value, tuple):
        return [to_plain(item) for item in value]
    return value


class OptimizationStatus(str, Enum):
    SUCCESS = "success"
    INVALID_INPUT = "invalid_input"
    INFEASIBLE_CARGO = "infeasible_cargo"
    NO_FEASIBLE_ROUTE = "no_feasible_route"


@dataclass(frozen=True, slots=True)
class OptimizationResult:
    """Outcome of a single quote optimisation.

    Failures are carried as values: ``status`` tells the caller which branch
    applies and ``message``/``errors`` explain it to an end user.
    """

    status: OptimizationStatus
    message: str
    feasible_vehicles: tuple[str, ...]
    cargo: Mapping[str, Any]
    algorithm_details: Mapping[str, Any]
    selected_vehicle: Optional[str] = None
    vehicle_instance_id: Optional[str] = None
    strategy: Optional[str] = None
    route_strategy: Optional[RouteStrategy] = None
    hub: Optional[str] = None
    distances_km: Optional[Mapping[str, float]] = None
    total_distance_km: Optional[float] = None
    total_time_min: Optional[float] = None
    total_cost: Optional[float] = None
    original_cost: Optional[float] = None
    pooling_discount: Optional[float] = None
    savings: Optional[float] = None
    route: Optional[tuple[Coordinate, ...]] = None
    selected_vehicle_details: Optional[Mapping[str, Any]] = None
    errors: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        for name in ("cargo", "algorithm_details", "distances_km", "selected_vehicle_details"):
            value = getattr(self, name)
            if value is not None:
                object.__setattr__(self, name, freeze(value))

    @property
    def success(self) -> bool:
        return self.status is OptimizationStatus.SUCCESS

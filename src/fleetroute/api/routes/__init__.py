"""API route registrations."""

from . import catalog, fleet, health, quotes

__all__ = ["catalog", "fleet", "health", "quotes"]

from __future__ import annotations


class FleetError(Exception):
    """Base class for rejected fleet operations."""


class RangeError(FleetError, ValueError):
    """A floor, floor count or car count is outside its valid range."""


class NotFoundError(FleetError, LookupError):
    """No car with the requested id exists in the fleet."""

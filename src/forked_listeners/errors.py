"""Errors raised while writing or reading the forked listener representation."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from forked_listeners.forked import Location


class ListenerConfigurationError(ValueError):
    """A listener definition is not complete enough to be sent to the worker."""


class ForkedRepresentationError(ValueError):
    def __init__(self, message: str, location: Location | None = None) -> None:
        super().__init__(message)
        self.location = location


class ForkedStructureError(ForkedRepresentationError):
    """Element boundaries do not match what the reader expected."""


class MissingAttributeError(ForkedRepresentationError):
    def __init__(self, attribute: str, location: Location | None = None) -> None:
        super().__init__(f"Attribute {attribute} is missing at {location}", location)
        self.attribute = attribute

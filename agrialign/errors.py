"""Error kinds raised by the coordination core and its data layer.

The request layer maps ``LookupError`` to 404 and ``ValueError`` to 400, so
every error here subclasses one of the two.
"""

from __future__ import annotations


class InvalidInputError(ValueError):
    """An input failed validation before any computation ran."""

    def __init__(self, field: str, message: str):
        super().__init__(f"{field}: {message}")
        self.field = field
        self.message = message


class NotFoundError(LookupError):
    """A farmer, crop, region or facility identifier is unknown."""

    def __init__(self, kind: str, identifier: str):
        super().__init__(f"{kind} {identifier} not found")
        self.kind = kind
        self.identifier = identifier


class EmptyInputError(ValueError):
    """Aggregation was requested over zero forecasts."""

    def __init__(self, message: str = "cannot aggregate an empty forecast set"):
        super().__init__(message)

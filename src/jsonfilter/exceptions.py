"""Custom exceptions for jsonfilter."""


class JsonFilterError(Exception):
    """Base exception for jsonfilter operations."""


class ShapeError(JsonFilterError):
    """Shape argument is not a JSON object."""


class SchemaGenerationError(JsonFilterError):
    """Type inference tool is missing or failed."""


class ContentTooLargeError(JsonFilterError):
    """Fetched body grew past the content cap."""

    def __init__(self, size: int, limit: int) -> None:
        super().__init__(f"Received {size} bytes, limit is {limit}")
        self.size = size
        self.limit = limit

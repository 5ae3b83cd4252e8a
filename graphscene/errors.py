"""
Exception types raised for caller-contract violations.

Graph content never raises: dangling edges, cycles and empty decorations are
handled by degrading the output. Only documents that cannot be parsed into a
Graph, and invalid render options, surface as errors.
"""


class GraphSceneError(ValueError):
    """Base class for all graphscene errors."""


class GraphFormatError(GraphSceneError):
    """Raised when an input document does not parse into a Graph."""

    def __init__(self, message: str, details: list[dict] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or []

    def __str__(self) -> str:
        return self.message


class ConfigError(GraphSceneError):
    """Raised when render options are invalid."""

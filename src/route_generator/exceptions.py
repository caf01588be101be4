class RouteGeneratorError(Exception):
    """Base exception for route generation errors."""


class ExternalServiceError(RouteGeneratorError):
    """Raised when the directions API call fails or returns an unusable payload."""


class NoRoutesError(RouteGeneratorError):
    """Raised when there are no candidate routes to choose from."""


class DecodeError(RouteGeneratorError):
    """Raised when an encoded polyline string is malformed."""


class GeometryError(RouteGeneratorError):
    """Raised when a route has fewer than two usable points."""


class InvalidIntervalError(RouteGeneratorError):
    """Raised when a densification interval is not a positive finite number."""

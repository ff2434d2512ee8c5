class CalmaLinkError(Exception):
    """Base exception for the CalmaLink chat service."""


class ConfigurationError(CalmaLinkError):
    """Raised when required configuration is missing or invalid."""


class CatalogError(CalmaLinkError):
    """Raised when a practice catalog file cannot be loaded."""


class ResponderError(CalmaLinkError):
    """Raised when the service is asked to respond before a responder is wired."""

"""
Security-related exceptions.
"""


class SecurityError(Exception):
    """Base exception for security violations."""

    pass


class ValidationError(SecurityError):
    """Raised when request input validation fails."""

    pass


class ToolPolicyViolationError(SecurityError):
    """Raised when a model tool call violates policy."""

    pass


class OriginNotAllowedError(SecurityError):
    """Raised when a browser request comes from an origin outside the allow-list."""

    def __init__(self, origin: str):
        super().__init__(f"Origin not allowed: {origin!r}")
        self.origin = origin

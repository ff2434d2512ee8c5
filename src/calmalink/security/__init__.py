"""
Security module for request validation, origin checks and tool policy enforcement.
"""

from .exceptions import SecurityError, ValidationError, ToolPolicyViolationError, OriginNotAllowedError
from .input_validator import InputValidator
from .origin_policy import OriginPolicy
from .tool_policy import ToolPolicy
from .tool_interceptor import ToolCallInterceptor

__all__ = [
    "SecurityError",
    "ValidationError",
    "ToolPolicyViolationError",
    "OriginNotAllowedError",
    "InputValidator",
    "OriginPolicy",
    "ToolPolicy",
    "ToolCallInterceptor",
]

"""
Origin allow-list for browser callers.
"""

import logging
from typing import Iterable, Optional

from .exceptions import OriginNotAllowedError

logger = logging.getLogger(__name__)


class OriginPolicy:
    """
    Decides whether a request's ``Origin`` header is acceptable.

    Unknown origins are rejected outright, never rewritten to a default.
    Requests without an Origin header come from non-browser callers and are
    accepted unless ``require_origin`` is set.
    """

    def __init__(self, allowed_origins: Iterable[str], require_origin: bool = False):
        self._allowed = frozenset(origin.rstrip("/") for origin in allowed_origins)
        self._require_origin = require_origin

    @property
    def allowed_origins(self) -> list:
        return sorted(self._allowed)

    def is_allowed(self, origin: Optional[str]) -> bool:
        if not origin:
            return not self._require_origin
        return origin.rstrip("/") in self._allowed

    def check(self, origin: Optional[str]) -> None:
        """
        :raises OriginNotAllowedError: If the origin is not acceptable
        """
        if not self.is_allowed(origin):
            logger.warning(f"Rejected request from origin {origin!r}")
            raise OriginNotAllowedError(origin or "")

import logging
from time import time
from typing import Any, Optional

from .config import CalmaLinkConfig
from .exceptions import ResponderError
from .orchestration.responders import Responder
from .schemas import ResponseEnvelope
from .security.input_validator import InputValidator

logger = logging.getLogger(__name__)


class CalmaLinkService:
    """
    Facade over the chat subsystem.
    The ONLY entry point for the HTTP and UI layers.
    """

    def __init__(self, config: CalmaLinkConfig):
        self.config = config
        self._responder: Optional[Responder] = None

    def respond(self, messages: Any) -> ResponseEnvelope:
        """
        Answer a chat request.

        :param messages: Raw ``messages`` value from the request body
        :return: ResponseEnvelope for the latest user turn
        :raises ValidationError: If a turn exceeds the configured length
        :raises ConfigurationError: If the generative path is enabled but unusable
        """
        if self._responder is None:
            raise ResponderError("Responder is not initialized.")

        start_time = time()
        history = InputValidator.normalize_history(
            messages,
            max_turns=self.config.max_history_turns,
            max_length=self.config.max_message_length,
        )
        envelope = self._responder.respond(history)

        latency_ms = int((time() - start_time) * 1000)
        logger.info(
            f"Responded to {len(history)} turn(s) - intent: {envelope.intent}, "
            f"tool: {envelope.tool.name if envelope.tool else None}, latency: {latency_ms}ms"
        )
        return envelope

    # ----------------------------
    # Dependency injection setters
    # ----------------------------
    def set_responder(self, responder: Responder) -> None:
        """Inject the responder strategy."""
        self._responder = responder

    @property
    def responder(self) -> Optional[Responder]:
        return self._responder

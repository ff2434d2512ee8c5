"""
Public application facade for the CalmaLink chat service.

This is the single stable entry point for the library.
All internal structure can change freely, but this API remains stable.
"""
import logging
from typing import Any, Optional

from .agent.tool_calling_agent import ToolCallingAgent
from .agent.tools import build_tools
from .composer import ResponseComposer
from .config import CalmaLinkConfig
from .exceptions import ConfigurationError
from .interaction.intent_router import IntentRouter
from .llm_factory import get_llm_instance
from .orchestration.responders import DeterministicResponder, GenerativeResponder
from .schemas import ResponseEnvelope
from .service import CalmaLinkService

logger = logging.getLogger(__name__)


class CalmaLinkApp:
    """
    Public application facade.

    All dependency wiring and factory usage is encapsulated here.

    Usage:
        config = load_config_from_env()
        app = CalmaLinkApp(config)
        app.initialize()
        envelope = app.chat([{"role": "user", "content": "español"}])
    """

    def __init__(self, config: CalmaLinkConfig, llm: Any = None):
        """
        :param config: CalmaLinkConfig instance
        :param llm: Optional pre-built chat model (skips the LLM factory)
        """
        self._config = config
        self._llm = llm
        self._service: Optional[CalmaLinkService] = None

    @property
    def config(self) -> CalmaLinkConfig:
        return self._config

    def initialize(self) -> None:
        """
        Build the router, composer and responder and wire them to the service.

        When ENABLE_LLM is set but the model cannot be created, the failure is
        kept and reported for turns that reach the generative path; keyword
        intents keep working.

        Call this once before using chat().
        """
        if self._service:
            return

        router = IntentRouter(
            default_language=self._config.default_language,
            language_window=self._config.language_window,
        )
        composer = ResponseComposer(self._config.catalog)
        responder = DeterministicResponder(router, composer)

        if self._config.enable_llm:
            responder = self._build_generative(responder)

        self._service = CalmaLinkService(self._config)
        self._service.set_responder(responder)
        logger.info(f"CalmaLink initialized with {type(responder).__name__}")

    def chat(self, messages: Any) -> ResponseEnvelope:
        """
        Answer a conversation.

        :param messages: List of {"role", "content"} turns, oldest first
        :return: ResponseEnvelope
        :raises: RuntimeError if initialize() has not been called
        """
        if not self._service:
            raise RuntimeError("App not initialized. Call initialize() first.")

        return self._service.respond(messages)

    def _build_generative(self, fallback: DeterministicResponder) -> GenerativeResponder:
        llm = self._llm
        misconfiguration = None
        if llm is None:
            try:
                llm = get_llm_instance(
                    provider=self._config.llm_provider,
                    model=self._config.llm_model,
                    temperature=self._config.llm_temperature,
                    timeout=self._config.llm_timeout_seconds,
                    max_retries=self._config.llm_max_retries,
                )
            except ConfigurationError as e:
                logger.error(f"Generative responder unavailable: {e}")
                misconfiguration = e
            except (ValueError, ImportError) as e:
                # Unknown provider or missing provider package
                logger.error(f"Generative responder unavailable: {e}")
                misconfiguration = ConfigurationError(str(e))

        agent = ToolCallingAgent(llm, build_tools(self._config.catalog)) if llm is not None else None
        return GenerativeResponder(
            fallback,
            agent=agent,
            timeout_seconds=self._config.llm_timeout_seconds,
            misconfiguration=misconfiguration,
        )

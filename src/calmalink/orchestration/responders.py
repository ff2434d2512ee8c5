"""
Responder strategies - classify, then compose.
"""
import asyncio
import concurrent.futures
import logging
import threading
from dataclasses import dataclass, replace
from typing import Optional, Protocol, Sequence

from .. import replies
from ..composer import ResponseComposer
from ..exceptions import ConfigurationError
from ..interaction.intent_router import IntentRouter
from ..interaction.intent_types import Intent, IntentType
from ..schemas import ConversationTurn, ResponseEnvelope
from ..security.exceptions import ToolPolicyViolationError
from ..security.input_validator import InputValidator

logger = logging.getLogger(__name__)


class Responder(Protocol):
    def respond(self, history: Sequence[ConversationTurn]) -> ResponseEnvelope:
        ...


@dataclass(frozen=True)
class Decision:
    intent: Intent
    language: str
    turn_index: int


class DeterministicResponder:
    """
    Keyword router plus composer. No I/O; identical input gives identical output.
    """

    def __init__(self, router: IntentRouter, composer: ResponseComposer):
        self.router = router
        self.composer = composer

    def decide(self, history: Sequence[ConversationTurn]) -> Decision:
        intent = self.router.classify(history)
        language = self.router.resolve_language(intent, history)
        turn_index = sum(1 for turn in history if turn.role == "user")
        return Decision(intent=intent, language=language, turn_index=turn_index)

    def render(self, decision: Decision) -> ResponseEnvelope:
        return self.composer.compose(decision.intent, decision.language, decision.turn_index)

    def respond(self, history: Sequence[ConversationTurn]) -> ResponseEnvelope:
        decision = self.decide(history)
        logger.info(f"Intent {decision.intent.type.value} (language={decision.language})")
        return self.render(decision)


class GenerativeResponder:
    """
    Decorates the deterministic responder with an optional model call.

    Classified intents are answered deterministically. Only unclassified
    turns reach the model, under an overall timeout; any error, timeout or
    invalid tool call falls back to the deterministic reply.

    A missing model (no credentials at start-up) is reported as a
    ConfigurationError for turns that would reach it.
    """

    def __init__(
        self,
        fallback: DeterministicResponder,
        agent=None,
        timeout_seconds: float = 15.0,
        misconfiguration: Optional[ConfigurationError] = None,
    ):
        self._fallback = fallback
        self._agent = agent
        self._timeout_seconds = timeout_seconds
        self._misconfiguration = misconfiguration
        self._loop: Optional[asyncio.AbstractEventLoop] = None
        self._loop_lock = threading.Lock()

    def _event_loop(self) -> asyncio.AbstractEventLoop:
        """
        One event loop per responder, running on a daemon thread.

        Provider clients pool async HTTP connections bound to the loop that
        opened them, so every model call must run on the same loop.
        """
        with self._loop_lock:
            if self._loop is None:
                loop = asyncio.new_event_loop()
                threading.Thread(target=loop.run_forever, name="calmalink-model-loop", daemon=True).start()
                self._loop = loop
            return self._loop

    def respond(self, history: Sequence[ConversationTurn]) -> ResponseEnvelope:
        decision = self._fallback.decide(history)
        logger.info(f"Intent {decision.intent.type.value} (language={decision.language})")

        if decision.intent.type is not IntentType.UNCLASSIFIED:
            return self._fallback.render(decision)

        last_user = next((turn for turn in reversed(history) if turn.role == "user"), None)
        if last_user is None:
            return self._fallback.render(decision)
        if InputValidator.looks_like_injection(last_user.content):
            logger.warning("Possible prompt injection; skipping model call")
            return self._fallback.render(decision)

        if self._agent is None:
            raise self._misconfiguration or ConfigurationError("Generative responder has no model")

        try:
            future = asyncio.run_coroutine_threadsafe(
                asyncio.wait_for(
                    self._agent.arespond(history, decision.language),
                    timeout=self._timeout_seconds,
                ),
                self._event_loop(),
            )
            reply = future.result()
        except (asyncio.TimeoutError, concurrent.futures.TimeoutError):
            logger.warning(f"Model call timed out after {self._timeout_seconds}s; using deterministic reply")
            return self._fallback.render(decision)
        except ToolPolicyViolationError as e:
            logger.warning(f"Rejected model tool call: {e}; using deterministic reply")
            return self._fallback.render(decision)
        except Exception as e:
            logger.error(f"Model call failed: {e}; using deterministic reply", exc_info=True)
            return self._fallback.render(decision)

        logger.info(f"Model replied in {reply.llm_latency_ms}ms")
        return self._envelope_for(reply, decision)

    def _envelope_for(self, reply, decision: Decision) -> ResponseEnvelope:
        if reply.intent is not None:
            # Tool payloads always come from the catalog via the composer
            language = reply.intent.language or decision.language
            envelope = self._fallback.render(replace(decision, intent=reply.intent, language=language))
            if reply.intent.type is IntentType.START_PRACTICE and reply.text:
                envelope = replace(envelope, message=reply.text)
            return envelope

        if not reply.text:
            logger.warning("Model returned no text; using deterministic reply")
            return self._fallback.render(decision)

        tag = IntentType.UNCLASSIFIED.value if replies.is_invitation(reply.text) else None
        return ResponseEnvelope(message=reply.text, intent=tag, language=decision.language)

"""
Deterministic intent router for conversation classification.

Routes the latest user turn to an intent without LLM calls.
Fast, safe, and predictable.
"""
import logging
from typing import Optional, Sequence

from ..replies import is_invitation
from ..schemas import ConversationTurn
from .intent_types import Intent, IntentType
from .keyword_rules import (
    DEFAULT_RULES,
    EXPLICIT_LANGUAGE,
    LANGUAGE_ONLY_EN,
    LANGUAGE_ONLY_ES,
    SPANISH_HINTS,
    KeywordRule,
)

logger = logging.getLogger(__name__)


class IntentRouter:
    """
    Deterministic intent router.

    Classifies the last user turn by walking a priority-ordered rule table.
    The previous assistant turn is consulted only to decide whether a bare
    affirmation answers an invitation to start a practice.
    """

    def __init__(
        self,
        rules: Sequence[KeywordRule] = DEFAULT_RULES,
        default_language: str = "en",
        language_window: int = 5,
    ):
        self._rules = tuple(rules)
        self._default_language = default_language
        self._language_window = language_window

    @staticmethod
    def normalize(text: str) -> str:
        return (text or "").lower().strip()

    def classify(self, history: Sequence[ConversationTurn]) -> Intent:
        """
        Classify a conversation by its most recent user turn.

        :param history: Conversation turns, oldest first (may be empty)
        :return: Intent; UNCLASSIFIED when there is no user turn or nothing matches
        """
        index = self._last_user_index(history)
        if index is None:
            return Intent.unclassified()

        invited = self._was_invited(history, index)
        return self.route(history[index].content, invited=invited)

    def route(self, text: str, invited: bool = False) -> Intent:
        """
        Route a single user message to an intent.

        :param text: User message
        :param invited: Whether the previous assistant turn invited a practice
        :return: Intent for the first matching rule
        """
        normalized = self.normalize(text)
        if not normalized:
            return Intent.unclassified()

        for rule in self._rules:
            if rule.requires_invitation and not invited:
                continue
            if not rule.matches(normalized):
                continue

            language = rule.language
            if rule.intent is IntentType.START_PRACTICE and language is None:
                language = self.explicit_language(normalized)
            return Intent(rule.intent, language)

        return Intent.unclassified()

    def resolve_language(self, intent: Intent, history: Sequence[ConversationTurn]) -> str:
        """Language pinned by the intent, else the conversation language."""
        return intent.language or self.infer_language(history)

    def infer_language(self, history: Sequence[ConversationTurn]) -> str:
        """
        Infer the conversation language from recent user turns.

        Turns are scanned newest first; the first turn carrying a language
        signal decides. Defaults to the configured language.

        :param history: Conversation turns, oldest first
        :return: Language code
        """
        user_turns = [
            turn for turn in history
            if getattr(turn, "role", None) == "user" and isinstance(getattr(turn, "content", None), str)
        ]
        for turn in reversed(user_turns[-self._language_window:]):
            text = self.normalize(turn.content)
            if text in LANGUAGE_ONLY_ES:
                return "es"
            if text in LANGUAGE_ONLY_EN:
                return "en"
            explicit = self.explicit_language(text)
            if explicit:
                return explicit
            if any(hint in text for hint in SPANISH_HINTS):
                return "es"
        return self._default_language

    @staticmethod
    def explicit_language(text: str) -> Optional[str]:
        for language, names in EXPLICIT_LANGUAGE:
            if any(name in text for name in names):
                return language
        return None

    @staticmethod
    def _last_user_index(history: Sequence[ConversationTurn]) -> Optional[int]:
        for index in range(len(history) - 1, -1, -1):
            turn = history[index]
            if getattr(turn, "role", None) == "user" and isinstance(getattr(turn, "content", None), str):
                return index
        return None

    @staticmethod
    def _was_invited(history: Sequence[ConversationTurn], user_index: int) -> bool:
        """
        Whether the assistant turn preceding ``user_index`` invited a practice.

        An explicit intent tag wins; untagged turns are matched against the
        service's own invitation sentences.
        """
        for index in range(user_index - 1, -1, -1):
            turn = history[index]
            role = getattr(turn, "role", None)
            if role == "user":
                return False
            if role != "assistant":
                continue
            tag = getattr(turn, "intent", None)
            if tag:
                try:
                    return IntentType(tag).invites_practice
                except ValueError:
                    logger.debug(f"Ignoring unknown intent tag on assistant turn: {tag!r}")
            return is_invitation(getattr(turn, "content", "") or "")
        return False

"""
Input validation for chat requests.
"""

import logging
import re
from typing import Any, List

from ..schemas import ConversationTurn
from .exceptions import ValidationError

logger = logging.getLogger(__name__)


class InputValidator:
    """
    Validates conversation history received over HTTP.

    Also screens user turns for prompt-injection attempts before they are
    forwarded to a generative model.
    """

    MAX_HISTORY_TURNS = 50
    MAX_MESSAGE_LENGTH = 2000

    INJECTION_PATTERNS = [
        r"ignore\s+(all\s+)?(previous|above|all)\s+instructions?",
        r"(system|assistant|prompt)\s*:",
        r"you\s+are\s+now",
        r"forget\s+everything",
        r"disregard\s+(the\s+)?(above|previous)",
        r"override\s+(previous|above|all)",
        r"pretend\s+to\s+be",
        r"reveal\s+(your\s+)?(system\s+)?prompt",
        r"ignora\s+(todas\s+)?(las\s+)?instrucciones",
        r"olvida\s+todo",
        r"ahora\s+eres",
    ]

    @staticmethod
    def normalize_history(
        raw: Any,
        max_turns: int = MAX_HISTORY_TURNS,
        max_length: int = MAX_MESSAGE_LENGTH,
    ) -> List[ConversationTurn]:
        """
        Coerce the request's ``messages`` value into conversation turns.

        :param raw: Decoded JSON value of ``messages``
        :param max_turns: Only the newest N turns are kept
        :param max_length: Maximum characters per turn
        :return: Turns, oldest first; empty when ``raw`` is not a list
        :raises ValidationError: If a kept turn exceeds ``max_length``
        """
        if not isinstance(raw, list):
            if raw is not None:
                logger.debug(f"Ignoring non-list messages value of type {type(raw).__name__}")
            return []

        turns = []
        skipped = 0
        for item in raw:
            turn = ConversationTurn.from_dict(item)
            if turn is None:
                skipped += 1
                continue
            turns.append(turn)

        if skipped:
            logger.debug(f"Skipped {skipped} malformed turn(s)")

        if len(turns) > max_turns:
            turns = turns[-max_turns:]

        for turn in turns:
            InputValidator.validate_length(turn.content, max_length, field_name=f"{turn.role} message")

        return turns

    @staticmethod
    def looks_like_injection(text: str) -> bool:
        """
        Check a user message against known prompt-injection phrasings.

        :param text: User message
        :return: True if any injection pattern matches
        """
        if not text:
            return False
        lowered = text.lower()
        return any(re.search(pattern, lowered) for pattern in InputValidator.INJECTION_PATTERNS)

    @staticmethod
    def validate_length(text: str, max_length: int, field_name: str = "Input") -> str:
        """
        Validate text length.

        :param text: Text to validate
        :param max_length: Maximum allowed length
        :param field_name: Name of the field for error messages
        :return: Validated text
        :raises ValidationError: If text exceeds maximum length
        """
        if not isinstance(text, str):
            raise ValidationError(f"{field_name} must be a string")

        if len(text) > max_length:
            raise ValidationError(
                f"{field_name} exceeds maximum length of {max_length} characters"
            )

        return text

"""
Tool call interceptor for security validation.
"""

from typing import Any, Dict, Optional
import logging

from ..interaction.intent_types import Intent, IntentType
from .exceptions import ToolPolicyViolationError
from .tool_policy import ToolPolicy

logger = logging.getLogger(__name__)


class ToolCallInterceptor:
    """
    Intercepts model tool calls before anything acts on them.

    A validated call is translated into the Intent it expresses, so the
    deterministic composer renders the reply and tool payload.
    """

    @staticmethod
    def validate_tool_call(tool_name: str, tool_args: Optional[Dict[str, Any]] = None) -> Intent:
        """
        Validate a tool call and map it to an intent.

        :param tool_name: Name of the tool being called
        :param tool_args: Parameters for the tool
        :return: Intent expressed by the call
        :raises ToolPolicyViolationError: If the call is not allowed or malformed
        """
        try:
            args = ToolPolicy.validate_tool_call(tool_name, tool_args)
        except ToolPolicyViolationError as e:
            logger.warning(f"Tool policy violation for {tool_name!r}: {e}")
            raise

        intent_type = IntentType.from_tool_name(tool_name)
        if intent_type is None:
            raise ToolPolicyViolationError(f"Tool '{tool_name}' has no matching intent")

        language = getattr(args, "language", None) if intent_type is IntentType.START_PRACTICE else None
        logger.debug(f"Tool call validated: {tool_name} -> {intent_type.value}")
        return Intent(intent_type, language)

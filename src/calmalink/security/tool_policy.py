"""
Tool allow-list and argument schemas for model tool calls.
"""

from typing import Any, Dict, Optional, Set, Type

from pydantic import BaseModel
from pydantic import ValidationError as SchemaValidationError

from ..agent.tools import TOOL_ARG_SCHEMAS
from .exceptions import ToolPolicyViolationError


class ToolPolicy:
    """
    Defines which tools a generative model may call and with which arguments.

    Tool calls are untrusted model output: a call is only honoured when its
    name is allow-listed and its arguments validate against the tool's schema.
    """

    ALLOWED_TOOLS: Set[str] = set(TOOL_ARG_SCHEMAS)

    @staticmethod
    def is_tool_allowed(tool_name: str) -> bool:
        return tool_name in ToolPolicy.ALLOWED_TOOLS

    @staticmethod
    def get_args_schema(tool_name: str) -> Optional[Type[BaseModel]]:
        return TOOL_ARG_SCHEMAS.get(tool_name)

    @staticmethod
    def validate_tool_call(tool_name: str, tool_args: Optional[Dict[str, Any]] = None) -> BaseModel:
        """
        Validate a tool call.

        :param tool_name: Name of the tool the model called
        :param tool_args: Arguments the model supplied
        :return: Parsed argument model
        :raises ToolPolicyViolationError: If the tool is unknown or the arguments are invalid
        """
        if not ToolPolicy.is_tool_allowed(tool_name):
            raise ToolPolicyViolationError(
                f"Tool '{tool_name}' is not allowed. "
                f"Allowed tools: {', '.join(sorted(ToolPolicy.ALLOWED_TOOLS))}"
            )

        if tool_args is None:
            tool_args = {}
        if not isinstance(tool_args, dict):
            raise ToolPolicyViolationError(f"Arguments for tool '{tool_name}' must be an object")

        schema = ToolPolicy.get_args_schema(tool_name)
        try:
            return schema.model_validate(tool_args)
        except SchemaValidationError as e:
            raise ToolPolicyViolationError(
                f"Invalid arguments for tool '{tool_name}': {e.error_count()} error(s)"
            ) from e

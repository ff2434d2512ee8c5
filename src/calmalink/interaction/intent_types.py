"""
Intent types for conversation classification.

Defines the mutually exclusive actions a user turn can map to.
"""
from dataclasses import dataclass
from enum import Enum
from typing import Optional


class IntentType(str, Enum):
    """Types of user intents, in classification priority order."""
    CRISIS = "crisis"
    LIBRARY_REQUEST = "library_request"
    HELP_REQUEST = "help_request"
    DECLINE_OR_TALK_ONLY = "decline_or_talk_only"
    START_PRACTICE = "start_practice"
    UNCLASSIFIED = "unclassified"

    @classmethod
    def get_tool_mapping(cls) -> dict:
        """
        Map intents to the generative-model tool that expresses them.

        :return: Dictionary mapping intent to tool name (None when no tool exists)
        """
        return {
            cls.CRISIS: "handoff_crisis",
            cls.LIBRARY_REQUEST: "get_library",
            cls.HELP_REQUEST: "get_help",
            cls.DECLINE_OR_TALK_ONLY: None,
            cls.START_PRACTICE: "get_meditation",
            cls.UNCLASSIFIED: None,
        }

    @classmethod
    def from_tool_name(cls, tool_name: str) -> Optional["IntentType"]:
        for intent, name in cls.get_tool_mapping().items():
            if name == tool_name:
                return intent
        return None

    @property
    def invites_practice(self) -> bool:
        """Whether the reply for this intent ends with an invitation to start a practice."""
        return self in (IntentType.LIBRARY_REQUEST, IntentType.UNCLASSIFIED)


@dataclass(frozen=True)
class Intent:
    """A classification result; ``language`` is set only when the turn pins one."""
    type: IntentType
    language: Optional[str] = None

    @classmethod
    def unclassified(cls) -> "Intent":
        return cls(IntentType.UNCLASSIFIED)

from dataclasses import dataclass
from typing import Any, Dict, Optional

VALID_ROLES = ("user", "assistant", "system")


@dataclass(frozen=True)
class ConversationTurn:
    role: str
    content: str
    # Optional tag echoed back by clients on assistant turns (see ResponseEnvelope.intent)
    intent: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> Optional["ConversationTurn"]:
        """Build a turn from request JSON; returns None for malformed entries."""
        if not isinstance(data, dict):
            return None
        role = data.get("role")
        content = data.get("content")
        if role not in VALID_ROLES or not isinstance(content, str):
            return None
        intent = data.get("intent")
        return cls(role=role, content=content, intent=intent if isinstance(intent, str) else None)


@dataclass(frozen=True)
class ToolPayload:
    name: str
    result: Dict[str, Any]

    def to_dict(self) -> Dict[str, Any]:
        return {"name": self.name, "result": dict(self.result)}


@dataclass(frozen=True)
class ResponseEnvelope:
    message: str
    tool: Optional[ToolPayload] = None
    intent: Optional[str] = None
    language: Optional[str] = None

    def to_dict(self, include_intent: bool = False) -> Dict[str, Any]:
        payload: Dict[str, Any] = {"message": self.message}
        if self.tool is not None:
            payload["tool"] = self.tool.to_dict()
        if include_intent and self.intent:
            payload["intent"] = self.intent
        return payload

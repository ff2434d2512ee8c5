import asyncio
from typing import Any, List, Optional

from langchain_core.language_models.chat_models import BaseChatModel
from langchain_core.messages import AIMessage, BaseMessage
from langchain_core.outputs import ChatResult, ChatGeneration
from pydantic import Field


class DummyChatModel(BaseChatModel):
    """
    LangChain-compatible scripted chat model for evaluation and tests.

    Returns ``responses`` in order (the last one repeats). Strings become
    plain AIMessages; AIMessages are returned as-is, so tool calls can be
    scripted. ``delay_seconds`` and ``error`` simulate slow or failing
    providers.
    """

    responses: List[Any] = Field(default_factory=lambda: ["Dummy response"])
    delay_seconds: float = 0.0
    error: Optional[str] = None
    calls: int = 0
    received: List[List[BaseMessage]] = Field(default_factory=list)

    @property
    def _llm_type(self) -> str:
        return "dummy-chat"

    def _next_message(self, messages: List[BaseMessage]) -> AIMessage:
        self.received.append(list(messages))
        index = min(self.calls, len(self.responses) - 1)
        self.calls += 1
        if self.error:
            raise RuntimeError(self.error)
        response = self.responses[index]
        if isinstance(response, AIMessage):
            return response
        return AIMessage(content=str(response))

    def _generate(
        self,
        messages: List[BaseMessage],
        stop: Optional[List[str]] = None,
        run_manager: Optional[Any] = None,
        **kwargs: Any,
    ) -> ChatResult:
        generation = ChatGeneration(message=self._next_message(messages))
        return ChatResult(generations=[generation])

    async def _agenerate(
        self,
        messages: List[BaseMessage],
        stop: Optional[List[str]] = None,
        run_manager: Optional[Any] = None,
        **kwargs: Any,
    ) -> ChatResult:
        if self.delay_seconds:
            await asyncio.sleep(self.delay_seconds)
        generation = ChatGeneration(message=self._next_message(messages))
        return ChatResult(generations=[generation])

    def bind_tools(self, tools: Any, **kwargs: Any):
        # Tool calls are scripted in ``responses``; return self unchanged.
        return self


def tool_call(name: str, args: Optional[dict] = None, call_id: str = "call_1") -> AIMessage:
    """An AIMessage carrying a single tool call."""
    return AIMessage(content="", tool_calls=[{"name": name, "args": args or {}, "id": call_id}])

import logging
from dataclasses import dataclass
from time import time
from typing import List, Optional, Sequence

from langchain.tools import BaseTool
from langchain_core.messages import AIMessage, BaseMessage, HumanMessage, ToolMessage
from langchain_core.prompts import ChatPromptTemplate

from .. import replies
from ..interaction.intent_types import Intent, IntentType
from ..schemas import ConversationTurn
from ..security.tool_interceptor import ToolCallInterceptor
from .output_parser import AgentOutputParser
from .prompts import CHAT_PROMPT

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AgentReply:
    text: str
    intent: Optional[Intent] = None
    llm_latency_ms: int = 0


class ToolCallingAgent:
    """
    Single-tool calling agent (no ReAct loop).

    The model either answers in free text or picks exactly one tool. A
    ``get_meditation`` call gets one follow-up call so the model can
    introduce the practice in context; every other tool call is returned as
    an intent for the deterministic composer to render.
    """

    def __init__(self,
                 llm,
                 tools: List[BaseTool],
                 prompt: Optional[ChatPromptTemplate] = None):
        self._llm = llm
        self._tools = {tool.name: tool for tool in tools}
        self._prompt = prompt or CHAT_PROMPT.partial(tool_names=", ".join(self._tools))

        try:
            self._llm_with_tools = self._llm.bind_tools(tools, tool_choice="auto")
        except Exception as e:
            logger.warning(f"Failed to bind tools to LLM: {e}. Falling back to direct LLM.")
            self._llm_with_tools = self._llm

    @staticmethod
    def to_messages(history: Sequence[ConversationTurn]) -> List[BaseMessage]:
        """Client turns as chat messages; client-supplied system turns are dropped."""
        messages: List[BaseMessage] = []
        for turn in history:
            if turn.role == "user":
                messages.append(HumanMessage(content=turn.content))
            elif turn.role == "assistant":
                messages.append(AIMessage(content=turn.content))
        return messages

    async def arespond(self, history: Sequence[ConversationTurn], language: str) -> AgentReply:
        """
        Run one generative exchange.

        :param history: Conversation turns, oldest first
        :param language: Resolved conversation language code
        :return: AgentReply with the model text and, for tool calls, the intent
        :raises ToolPolicyViolationError: If the model calls a tool with invalid arguments
        """
        start = time()
        language_name = replies.LANGUAGE_NAMES["en"].get(language, language)
        messages = self._prompt.format_messages(language=language_name, history=self.to_messages(history))

        first = await self._llm_with_tools.ainvoke(messages)
        tool_calls = getattr(first, "tool_calls", None) or []

        if not tool_calls:
            text = AgentOutputParser.clean(AgentOutputParser.text_of(first.content))
            return AgentReply(text=text, llm_latency_ms=self._elapsed_ms(start))

        if len(tool_calls) > 1:
            logger.info(f"Model requested {len(tool_calls)} tool calls; using the first")
        call = tool_calls[0]
        intent = ToolCallInterceptor.validate_tool_call(call.get("name"), call.get("args"))
        logger.info(f"Model selected tool {call.get('name')} -> {intent.type.value}")

        if intent.type is not IntentType.START_PRACTICE:
            return AgentReply(text="", intent=intent, llm_latency_ms=self._elapsed_ms(start))

        tool_output = await self._tools[call["name"]].ainvoke(call.get("args") or {})
        follow_up = await self._llm.ainvoke(messages + [
            first,
            ToolMessage(content=str(tool_output), tool_call_id=call.get("id") or call["name"]),
        ])
        text = AgentOutputParser.clean(AgentOutputParser.text_of(follow_up.content))
        return AgentReply(text=text, intent=intent, llm_latency_ms=self._elapsed_ms(start))

    @staticmethod
    def _elapsed_ms(start: float) -> int:
        return int((time() - start) * 1000)

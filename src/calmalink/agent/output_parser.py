import re
from typing import Any, Iterable

TOOL_NAMES = ("get_meditation", "get_library", "get_help", "handoff_crisis")


class AgentOutputParser:
    @staticmethod
    def text_of(content: Any) -> str:
        """
        Flatten a chat message's content into plain text.

        Providers return either a string or a list of content blocks.
        """
        if isinstance(content, str):
            return content
        if isinstance(content, list):
            parts = []
            for block in content:
                if isinstance(block, str):
                    parts.append(block)
                elif isinstance(block, dict) and block.get("type") == "text":
                    parts.append(str(block.get("text", "")))
            return "".join(parts)
        return ""

    @staticmethod
    def clean(text: str, tool_names: Iterable[str] = TOOL_NAMES) -> str:
        """
        Remove tool-call syntax that leaked into model text.
        """
        if not text:
            return ""
        # <function=tool_name>{...}</function>
        text = re.sub(r'<function=[^>]+>.*?</function>', '', text, flags=re.DOTALL)
        text = re.sub(r'</?function[^>]*>', '', text)
        for tool_name in tool_names:
            # tool_name({...}) or tool_name{...}
            text = re.sub(rf'\b{tool_name}\s*\(?\s*\{{[^}}]*\}}\s*\)?', '', text)
            text = re.sub(rf'^{tool_name}\s*$', '', text, flags=re.MULTILINE)
        text = re.sub(r'\n{3,}', '\n\n', text)
        return text.strip()

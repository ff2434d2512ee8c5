import json
from typing import Any, Dict, Literal, Type

from langchain.tools import BaseTool
from pydantic import BaseModel, ConfigDict, Field

from .. import replies
from ..catalog import DEFAULT_PRACTICE_ID, PracticeCatalog


class GetMeditationArgs(BaseModel):
    model_config = ConfigDict(extra="forbid")

    category: Literal["calm_breath"] = Field(
        default=DEFAULT_PRACTICE_ID,
        description="Practice to start. Only 'calm_breath' is available.",
    )
    language: Literal["en", "es"] = Field(
        default="en",
        description="Language of the practice: 'en' for English, 'es' for Spanish.",
    )
    duration: Literal[3] = Field(default=3, description="Length of the practice in minutes.")


class NoArgs(BaseModel):
    model_config = ConfigDict(extra="forbid")


class GetMeditationTool(BaseTool):
    """
    Returns the catalog record for a practice.

    The record is what the client plays, so the result always comes from the
    catalog and never from model text.
    """

    name: str = "get_meditation"
    description: str = (
        "Start a guided breathing practice. Use ONLY when the user clearly agrees to start, "
        "asks to play/listen/begin, or picks a language for the practice."
    )
    args_schema: Type[BaseModel] = GetMeditationArgs
    catalog: Any = Field(default=None)

    def __init__(self, catalog: PracticeCatalog, **kwargs):
        super().__init__(**kwargs)
        self.catalog = catalog

    def _run(self, category: str = DEFAULT_PRACTICE_ID, language: str = "en", duration: int = 3) -> str:
        record = self.catalog.get(language, category)
        return json.dumps(record.to_result(), ensure_ascii=False)

    async def _arun(self, category: str = DEFAULT_PRACTICE_ID, language: str = "en", duration: int = 3) -> str:
        return self._run(category=category, language=language, duration=duration)


class GetLibraryTool(BaseTool):
    name: str = "get_library"
    description: str = "List the available practices. Use when the user asks what meditations exist."
    args_schema: Type[BaseModel] = NoArgs
    catalog: Any = Field(default=None)

    def __init__(self, catalog: PracticeCatalog, **kwargs):
        super().__init__(**kwargs)
        self.catalog = catalog

    def _run(self) -> str:
        practices = [
            record.to_result()
            for language in self.catalog.languages
            for record in self.catalog.practices(language)
        ]
        return json.dumps({"practices": practices}, ensure_ascii=False)

    async def _arun(self) -> str:
        return self._run()


class GetHelpTool(BaseTool):
    name: str = "get_help"
    description: str = "Explain how to use the assistant. Use when the user asks for help or instructions."
    args_schema: Type[BaseModel] = NoArgs

    def _run(self) -> str:
        return json.dumps(dict(replies.HELP), ensure_ascii=False)

    async def _arun(self) -> str:
        return self._run()


class HandoffCrisisTool(BaseTool):
    name: str = "handoff_crisis"
    description: str = (
        "Use IMMEDIATELY if the user mentions suicide, self-harm, or being in danger. "
        "Returns emergency hotline information."
    )
    args_schema: Type[BaseModel] = NoArgs

    def _run(self) -> str:
        return json.dumps(dict(replies.CRISIS), ensure_ascii=False)

    async def _arun(self) -> str:
        return self._run()


TOOL_ARG_SCHEMAS: Dict[str, Type[BaseModel]] = {
    "get_meditation": GetMeditationArgs,
    "get_library": NoArgs,
    "get_help": NoArgs,
    "handoff_crisis": NoArgs,
}


def build_tools(catalog: PracticeCatalog) -> list:
    """The four tools offered to the generative model."""
    return [
        GetMeditationTool(catalog=catalog),
        GetLibraryTool(catalog=catalog),
        GetHelpTool(),
        HandoffCrisisTool(),
    ]

"""
Response composer: renders an intent into the response envelope.

Pure and deterministic. No network, no persistence, no randomness; the
supportive variants rotate by user-turn count so identical input always
produces identical output.
"""
import logging
from typing import Optional

from . import replies
from .catalog import DEFAULT_PRACTICE_ID, PracticeCatalog, PracticeRecord
from .interaction.intent_types import Intent, IntentType
from .schemas import ResponseEnvelope, ToolPayload

logger = logging.getLogger(__name__)

MEDITATION_TOOL = "get_meditation"


class ResponseComposer:
    """Renders each IntentType into a ResponseEnvelope."""

    def __init__(self, catalog: PracticeCatalog):
        self._catalog = catalog
        self._renderers = {
            IntentType.CRISIS: self._crisis,
            IntentType.LIBRARY_REQUEST: self._library,
            IntentType.HELP_REQUEST: self._help,
            IntentType.DECLINE_OR_TALK_ONLY: self._decline,
            IntentType.START_PRACTICE: self._start_practice,
            IntentType.UNCLASSIFIED: self._supportive,
        }

    def compose(self, intent: Intent, language: str, turn_index: int = 0) -> ResponseEnvelope:
        """
        Render an intent in the resolved language.

        :param intent: Classified intent
        :param language: Resolved conversation language
        :param turn_index: Number of user turns so far (selects reply variants)
        :return: ResponseEnvelope; ``tool`` is set only for START_PRACTICE
        """
        renderer = self._renderers[intent.type]
        return renderer(intent, language, turn_index)

    def practice_record(self, language: Optional[str]) -> PracticeRecord:
        """Default practice record, English when the language is missing."""
        return self._catalog.get(language, DEFAULT_PRACTICE_ID)

    def _crisis(self, intent: Intent, language: str, turn_index: int) -> ResponseEnvelope:
        return self._envelope(replies.pick(replies.CRISIS, language), intent, language)

    def _help(self, intent: Intent, language: str, turn_index: int) -> ResponseEnvelope:
        return self._envelope(replies.pick(replies.HELP, language), intent, language)

    def _library(self, intent: Intent, language: str, turn_index: int) -> ResponseEnvelope:
        lines = [replies.pick(replies.LIBRARY_HEADER, language)]
        for practice_id in self._catalog.practice_ids():
            record = self._catalog.get(language, practice_id)
            available = [
                code for code in self._catalog.languages
                if self._catalog.has(code, practice_id)
            ]
            lines.append(f"• {record.title} ({replies.language_list(available, language)})")
        lines.append(replies.pick(replies.LIBRARY_FOOTER, language))
        lines.append(replies.invitation(self.practice_record(language), language))
        return self._envelope("\n".join(lines), intent, language)

    def _decline(self, intent: Intent, language: str, turn_index: int) -> ResponseEnvelope:
        return self._envelope(replies.rotate(replies.DECLINE, language, turn_index), intent, language)

    def _supportive(self, intent: Intent, language: str, turn_index: int) -> ResponseEnvelope:
        message = " ".join([
            replies.rotate(replies.SUPPORTIVE, language, turn_index),
            replies.invitation(self.practice_record(language), language),
        ])
        return self._envelope(message, intent, language)

    def _start_practice(self, intent: Intent, language: str, turn_index: int) -> ResponseEnvelope:
        requested = intent.language or language
        record = self.practice_record(requested)
        if record.language != requested:
            logger.info(f"No practice for language '{requested}'; serving '{record.language}'")
        return ResponseEnvelope(
            message=replies.practice_intro(record),
            tool=ToolPayload(name=MEDITATION_TOOL, result=record.to_result()),
            intent=intent.type.value,
            language=record.language,
        )

    @staticmethod
    def _envelope(message: str, intent: Intent, language: str) -> ResponseEnvelope:
        return ResponseEnvelope(message=message, intent=intent.type.value, language=language)

"""
Static practice catalog.

The catalog maps language code -> practice id -> PracticeRecord. It is
configuration data: built once at start-up and never mutated afterwards.
"""
import json
import logging
from dataclasses import dataclass
from pathlib import Path
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional, Tuple

from .exceptions import CatalogError

logger = logging.getLogger(__name__)

DEFAULT_PRACTICE_ID = "calm_breath"
FALLBACK_LANGUAGE = "en"

AUDIO_EN = "https://calmalink-api-fresh.vercel.app/calmbreathenglish.mp3"
AUDIO_ES = "https://calmalink-api-fresh.vercel.app/spanishcalmbreath.mp3"


@dataclass(frozen=True)
class PracticeRecord:
    title: str
    duration_minutes: int
    audio_url: str
    script: str
    language: str

    def to_result(self) -> Dict[str, Any]:
        """Wire representation used as the ``tool.result`` payload."""
        return {
            "title": self.title,
            "language": self.language,
            "duration": self.duration_minutes,
            "audioUrl": self.audio_url,
            "script": self.script,
        }


class PracticeCatalog:
    """
    Read-only practice lookup with English fallback.

    Lookups never raise: a missing language or practice degrades to the
    English entry for the default practice.
    """

    def __init__(self, entries: Mapping[str, Mapping[str, PracticeRecord]]):
        if not entries.get(FALLBACK_LANGUAGE, {}).get(DEFAULT_PRACTICE_ID):
            raise CatalogError(
                f"Catalog must define '{DEFAULT_PRACTICE_ID}' for fallback language '{FALLBACK_LANGUAGE}'"
            )
        self._entries = MappingProxyType({
            language: MappingProxyType(dict(practices))
            for language, practices in entries.items()
        })

    @property
    def languages(self) -> Tuple[str, ...]:
        return tuple(self._entries.keys())

    def has(self, language: str, practice_id: str = DEFAULT_PRACTICE_ID) -> bool:
        return practice_id in self._entries.get(language, {})

    def get(self, language: Optional[str], practice_id: str = DEFAULT_PRACTICE_ID) -> PracticeRecord:
        """
        Look up a practice, falling back to the English default.

        :param language: Requested language code (may be None or unsupported)
        :param practice_id: Practice identifier
        :return: The matching PracticeRecord, or the English fallback
        """
        record = self._entries.get(language or "", {}).get(practice_id)
        if record is None:
            logger.info(
                f"Catalog miss for ({language}, {practice_id}); using '{FALLBACK_LANGUAGE}' default"
            )
            fallback = self._entries[FALLBACK_LANGUAGE]
            record = fallback.get(practice_id) or fallback[DEFAULT_PRACTICE_ID]
        return record

    def practices(self, language: str) -> Tuple[PracticeRecord, ...]:
        """All practices for a language (English ones when the language is absent)."""
        practices = self._entries.get(language) or self._entries[FALLBACK_LANGUAGE]
        return tuple(practices.values())

    def practice_ids(self) -> Tuple[str, ...]:
        ids = []
        for practices in self._entries.values():
            for practice_id in practices:
                if practice_id not in ids:
                    ids.append(practice_id)
        return tuple(ids)


def default_catalog() -> PracticeCatalog:
    """The built-in two-language Calm Breath catalog."""
    return PracticeCatalog({
        "en": {
            DEFAULT_PRACTICE_ID: PracticeRecord(
                title="Calm Breath • 3 min",
                duration_minutes=3,
                audio_url=AUDIO_EN,
                script=(
                    "Sit comfortably. Inhale 4, exhale 6. With each exhale, soften your shoulders "
                    "and jaw. If thoughts arise, place them on a cloud and let them drift by. "
                    "Return to your breath: inhale for 4, exhale for 6. When you’re ready, open "
                    "your eyes and carry this calm with you."
                ),
                language="en",
            ),
        },
        "es": {
            DEFAULT_PRACTICE_ID: PracticeRecord(
                title="Respiración Calma • 3 min",
                duration_minutes=3,
                audio_url=AUDIO_ES,
                script=(
                    "Siéntate con comodidad. Inhala 4, exhala 6. Con cada exhalación, suaviza "
                    "hombros y mandíbula. Si surgen pensamientos, colócalos sobre una nube y "
                    "déjalos pasar. Regresa a la respiración: inhala 4, exhala 6. Cuando estés "
                    "listo, abre los ojos y lleva contigo esta calma."
                ),
                language="es",
            ),
        },
    })


def load_catalog(path: str) -> PracticeCatalog:
    """
    Load a catalog override from a JSON file.

    Expected layout::

        {"en": {"calm_breath": {"title": "...", "duration": 3,
                                "audioUrl": "https://...", "script": "..."}}}

    :param path: Path to the JSON file
    :return: PracticeCatalog built from the file
    :raises CatalogError: If the file is unreadable or malformed
    """
    try:
        raw = json.loads(Path(path).read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as e:
        raise CatalogError(f"Cannot read catalog file {path}: {str(e)}") from e

    if not isinstance(raw, dict):
        raise CatalogError("Catalog file must contain a JSON object keyed by language")

    entries: Dict[str, Dict[str, PracticeRecord]] = {}
    for language, practices in raw.items():
        if not isinstance(practices, dict):
            raise CatalogError(f"Catalog language '{language}' must map practice ids to records")
        entries[language] = {}
        for practice_id, item in practices.items():
            try:
                entries[language][practice_id] = PracticeRecord(
                    title=str(item["title"]),
                    duration_minutes=int(item["duration"]),
                    audio_url=str(item["audioUrl"]),
                    script=str(item["script"]),
                    language=language,
                )
            except (KeyError, TypeError, ValueError) as e:
                raise CatalogError(
                    f"Invalid catalog entry {language}/{practice_id}: {str(e)}"
                ) from e

    logger.info(f"Loaded practice catalog from {path} ({', '.join(entries)})")
    return PracticeCatalog(entries)

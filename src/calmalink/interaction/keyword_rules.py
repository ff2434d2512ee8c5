"""
Keyword rule table for intent classification.

Rules are evaluated top to bottom and the first match wins. New phrases or
languages are added by editing the keyword sets, not the router.
"""
import re
from dataclasses import dataclass
from enum import Enum
from functools import lru_cache
from typing import FrozenSet, Optional, Pattern, Tuple

from .intent_types import IntentType


class MatchMode(str, Enum):
    CONTAINS = "contains"   # normalized text contains any keyword
    EXACT = "exact"         # normalized text equals a keyword
    PHRASE = "phrase"       # keyword contained, not as part of a longer word


@lru_cache(maxsize=None)
def _phrase_pattern(keyword: str) -> Pattern:
    return re.compile(rf"(?<!\w){re.escape(keyword)}(?!\w)")


@dataclass(frozen=True)
class KeywordRule:
    intent: IntentType
    keywords: FrozenSet[str]
    mode: MatchMode = MatchMode.CONTAINS
    language: Optional[str] = None
    requires_invitation: bool = False

    def matches(self, text: str) -> bool:
        if self.mode is MatchMode.EXACT:
            return text in self.keywords
        if self.mode is MatchMode.PHRASE:
            return any(_phrase_pattern(keyword).search(text) for keyword in self.keywords)
        return any(keyword in text for keyword in self.keywords)


CRISIS_EN = frozenset({
    "kill myself", "suicide", "suicidal", "want to die", "hurt myself", "harm myself",
    "overdose", "self harm", "self-harm", "end my life", "take my own life",
})
CRISIS_ES = frozenset({
    "suicidio", "suicidarme", "matarme", "quiero morir", "hacerme daño", "dañarme",
    "autolesion", "autolesión", "sobredosis", "quitarme la vida",
})

# "list" alone would also match "listen", so listing phrases are spelled out.
LIBRARY_EN = frozenset({
    "library", "catalog", "what do you have", "what meditations", "list of", "show list",
    "the list", "other meditations",
})
LIBRARY_ES = frozenset({
    "biblioteca", "catálogo", "catalogo", "lista", "qué tienes", "que tienes",
    "qué meditaciones", "que meditaciones",
})

HELP_EN = frozenset({"help", "how to use", "how does this work", "instructions", "what can you do"})
HELP_ES = frozenset({"ayuda", "como uso", "cómo uso", "instrucciones", "cómo funciona", "como funciona"})

DECLINE_EN = frozenset({
    "just talk", "i want to talk", "can we talk", "let's talk", "lets talk", "talk to me",
    "chat with me", "i want to chat", "just chat", "no meditation", "no meditations",
    "not now", "later", "maybe later", "skip", "stop", "cancel", "pause", "no thanks",
    "no thank you", "don't want", "dont want",
})
DECLINE_ES = frozenset({
    "solo hablar", "quiero hablar", "podemos hablar", "hablemos", "platiquemos", "charlemos",
    "quiero charlar", "solo chatear", "sin meditación", "sin meditacion", "no meditación",
    "no meditacion", "no ahora", "ahora no", "más tarde", "mas tarde", "quizás luego",
    "quizas luego", "omitir", "detener", "cancelar", "pausa", "no gracias", "no quiero",
})

LANGUAGE_ONLY_EN = frozenset({"english", "inglés", "ingles", "en"})
LANGUAGE_ONLY_ES = frozenset({"spanish", "español", "espanol", "es"})

START_EN = frozenset({
    "calm breath", "calm_breath", "play", "listen", "start", "begin", "audio", "track",
    "meditation", "meditate", "breathe", "breathing",
})
START_ES = frozenset({
    "respiración calma", "respiracion calma", "reproduce", "escuchar", "iniciar", "empezar",
    "pista", "meditación", "meditacion", "meditar", "respira", "respiración", "respiracion",
})

AFFIRMATION_EN = frozenset({
    "yes", "yeah", "yep", "ok", "okay", "sure", "go ahead", "lets do it", "let's do it",
    "please", "do it",
})
AFFIRMATION_ES = frozenset({"sí", "si", "dale", "claro", "por favor", "hazlo", "empecemos", "va"})

# Explicit language names inside a longer message pin the practice language.
EXPLICIT_LANGUAGE = (
    ("es", frozenset({"spanish", "español", "espanol"})),
    ("en", frozenset({"english", "inglés", "ingles"})),
)

# Vocabulary that suggests the user is writing in Spanish.
SPANISH_HINTS = frozenset({
    "español", "espanol", "meditación", "meditacion", "respiración", "respiracion",
    "reproduce", "escuchar", "pista", "hola", "gracias", "quiero", "estoy", "siento",
    "ayuda", "biblioteca", "por favor", "¿", "¡",
})


DEFAULT_RULES: Tuple[KeywordRule, ...] = (
    KeywordRule(IntentType.CRISIS, CRISIS_EN | CRISIS_ES),
    KeywordRule(IntentType.LIBRARY_REQUEST, LIBRARY_EN | LIBRARY_ES),
    KeywordRule(IntentType.HELP_REQUEST, HELP_EN | HELP_ES),
    KeywordRule(IntentType.DECLINE_OR_TALK_ONLY, DECLINE_EN | DECLINE_ES),
    KeywordRule(IntentType.START_PRACTICE, LANGUAGE_ONLY_EN, MatchMode.EXACT, language="en"),
    KeywordRule(IntentType.START_PRACTICE, LANGUAGE_ONLY_ES, MatchMode.EXACT, language="es"),
    KeywordRule(IntentType.START_PRACTICE, START_EN | START_ES),
    KeywordRule(
        IntentType.START_PRACTICE,
        AFFIRMATION_EN | AFFIRMATION_ES,
        MatchMode.PHRASE,
        requires_invitation=True,
    ),
)

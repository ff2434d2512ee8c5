"""
Interaction layer for intent routing.

Sits between the HTTP/UI layers and the response composer, providing
deterministic intent classification without LLM calls.
"""
from .intent_types import Intent, IntentType
from .intent_router import IntentRouter
from .keyword_rules import DEFAULT_RULES, KeywordRule, MatchMode

__all__ = ["Intent", "IntentType", "IntentRouter", "KeywordRule", "MatchMode", "DEFAULT_RULES"]

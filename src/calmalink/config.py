from dataclasses import dataclass, field
from typing import Tuple

from .catalog import PracticeCatalog, default_catalog


DEFAULT_ALLOWED_ORIGINS = (
    "https://calmalink.com",
    "https://www.calmalink.com",
)


@dataclass(frozen=True)
class CalmaLinkConfig:
    # CORS
    allowed_origins: Tuple[str, ...] = DEFAULT_ALLOWED_ORIGINS
    require_origin: bool = False

    # Content
    catalog: PracticeCatalog = field(default_factory=default_catalog)
    default_language: str = "en"
    language_window: int = 5

    # Request limits
    max_history_turns: int = 50
    max_message_length: int = 2000
    rate_limit: str = "20 per minute"

    # Generative enrichment (opt-in)
    enable_llm: bool = False
    llm_provider: str = "openai"
    llm_model: str = "gpt-4o"
    llm_temperature: float = 0.6
    llm_timeout_seconds: float = 15.0
    llm_max_retries: int = 1

    # Response / diagnostics
    include_intent_tag: bool = False
    expose_error_details: bool = False
    log_level: str = "INFO"

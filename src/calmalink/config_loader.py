"""
Configuration loader with validation.

Builds the immutable CalmaLinkConfig from environment variables.
"""
from typing import Optional

from dotenv import load_dotenv

from .catalog import default_catalog, load_catalog
from .config import CalmaLinkConfig, DEFAULT_ALLOWED_ORIGINS
from .config_validator import get_optional_env, parse_origins, validate_path
from .exceptions import CatalogError, ConfigurationError

SUPPORTED_PROVIDERS = ("openai", "groq")


def load_config_from_env(dotenv: bool = True) -> CalmaLinkConfig:
    """
    Load configuration from environment variables with validation.

    Usage:
        config = load_config_from_env()
        app = CalmaLinkApp(config)
        app.initialize()

    :param dotenv: Load a local .env file first (disable in production)
    :return: Validated CalmaLinkConfig instance
    :raises: ConfigurationError if values are invalid
    """
    if dotenv:
        load_dotenv()

    allowed_origins = parse_origins(get_optional_env("ALLOWED_ORIGINS")) or DEFAULT_ALLOWED_ORIGINS

    catalog_path = get_optional_env("CATALOG_PATH")
    if catalog_path:
        validate_path(catalog_path, "CATALOG_PATH", must_exist=True)
        try:
            catalog = load_catalog(catalog_path)
        except CatalogError as e:
            raise ConfigurationError(str(e)) from e
    else:
        catalog = default_catalog()

    llm_provider = get_optional_env("LLM_PROVIDER", default="openai").lower()
    if llm_provider not in SUPPORTED_PROVIDERS:
        raise ConfigurationError(
            f"LLM_PROVIDER must be one of {', '.join(SUPPORTED_PROVIDERS)}, got '{llm_provider}'."
        )

    default_language = get_optional_env("DEFAULT_LANGUAGE", default="en").lower()
    if not catalog.has(default_language):
        raise ConfigurationError(
            f"DEFAULT_LANGUAGE '{default_language}' is not in the practice catalog "
            f"({', '.join(catalog.languages)})."
        )

    return CalmaLinkConfig(
        allowed_origins=allowed_origins,
        require_origin=_bool_env("REQUIRE_ORIGIN", "false"),
        catalog=catalog,
        default_language=default_language,
        language_window=_int_env("LANGUAGE_WINDOW", "5"),
        max_history_turns=_int_env("MAX_HISTORY_TURNS", "50"),
        max_message_length=_int_env("MAX_MESSAGE_LENGTH", "2000"),
        rate_limit=get_optional_env("RATE_LIMIT", default="20 per minute"),
        enable_llm=_bool_env("ENABLE_LLM", "false"),
        llm_provider=llm_provider,
        llm_model=get_optional_env(
            "LLM_MODEL",
            default="gpt-4o" if llm_provider == "openai" else "llama-3.1-8b-instant"
        ),
        llm_temperature=_float_env("LLM_TEMPERATURE", "0.6"),
        llm_timeout_seconds=_float_env("LLM_TIMEOUT_SECONDS", "15"),
        llm_max_retries=_int_env("LLM_MAX_RETRIES", "1"),
        include_intent_tag=_bool_env("INCLUDE_INTENT_TAG", "false"),
        expose_error_details=_bool_env("EXPOSE_ERROR_DETAILS", "false"),
        log_level=get_optional_env("LOG_LEVEL", default="INFO").upper(),
    )


def create_config_for_production() -> CalmaLinkConfig:
    """
    Create configuration for production deployment.

    Environment variables only; no .env file loading.
    """
    return load_config_from_env(dotenv=False)


def _bool_env(key: str, default: str) -> bool:
    return get_optional_env(key, default).lower() == "true"


def _int_env(key: str, default: str) -> int:
    value = _number_env(key, default, int)
    if value <= 0:
        raise ConfigurationError(f"{key} must be a positive integer, got {value}.")
    return value


def _float_env(key: str, default: str) -> float:
    value = _number_env(key, default, float)
    if value < 0:
        raise ConfigurationError(f"{key} must not be negative, got {value}.")
    return value


def _number_env(key: str, default: str, cast):
    raw: Optional[str] = get_optional_env(key, default)
    try:
        return cast(raw)
    except (TypeError, ValueError):
        raise ConfigurationError(f"{key} must be a number, got '{raw}'.")

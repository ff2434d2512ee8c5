import logging
from typing import Any

from .config_validator import get_required_env

logger = logging.getLogger(__name__)

try:
    from langchain_groq import ChatGroq
except ImportError:
    ChatGroq = None

try:
    from langchain_openai import ChatOpenAI
except ImportError:
    ChatOpenAI = None


KNOWN_GROQ_MODELS = [
    "llama-3.1-8b-instant",
    "llama-3.3-70b-versatile",
    "mixtral-8x7b-32768",
]


def get_llm_instance(
    provider: str,
    model: str,
    temperature: float = 0.6,
    timeout: float = 15.0,
    max_retries: int = 1,
) -> Any:
    """
    Factory to return a ready-to-use chat model based on provider name.

    :param provider: 'groq' or 'openai'
    :param model: LLM model name
    :param temperature: Sampling temperature
    :param timeout: Per-request client timeout in seconds
    :param max_retries: Client-level retries
    :return: LangChain chat model ready to pass to ToolCallingAgent
    :raises ConfigurationError: If the provider's API key is missing
    """

    provider = provider.lower()

    if provider == "groq":
        if ChatGroq is None:
            raise ImportError("langchain_groq not installed")

        api_key = get_required_env(
            "GROQ_API_KEY",
            description="Groq API key for LLM (get from https://console.groq.com/keys)"
        )

        if model not in KNOWN_GROQ_MODELS:
            # Groq adds models often; unknown names are allowed
            logger.warning(f"Model '{model}' not in known Groq models: {KNOWN_GROQ_MODELS}")

        return ChatGroq(
            model=model,
            api_key=api_key,
            temperature=temperature,
            timeout=timeout,
            max_retries=max_retries,
            streaming=False,
        )

    elif provider == "openai":
        if ChatOpenAI is None:
            raise ImportError("langchain_openai not installed")

        api_key = get_required_env(
            "OPENAI_API_KEY",
            description="OpenAI API key for LLM (get from https://platform.openai.com/api-keys)"
        )
        return ChatOpenAI(
            model=model,
            api_key=api_key,
            temperature=temperature,
            timeout=timeout,
            max_retries=max_retries,
            streaming=False,
        )

    else:
        raise ValueError(f"Unknown LLM provider: {provider}")

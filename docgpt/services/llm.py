"""
LLM factory - ChatLiteLLM clients bound to a chat's model
Supports 100+ model providers via LiteLLM
"""

import logging
from typing import Optional

import litellm
from langchain_litellm import ChatLiteLLM

from docgpt.config import settings, MODEL_PRESETS

# Configure litellm to automatically drop unsupported parameters
litellm.drop_params = True

logger = logging.getLogger(__name__)


def resolve_model_string(model: str) -> str:
    """
    Map a chat model identifier to a LiteLLM model string

    OpenAI model names are passed through; anything without a provider
    prefix gets the configured default provider.
    """
    if "/" in model or model.startswith("gpt-") or model.startswith("o1"):
        return model
    return f"{settings.LLM_PROVIDER}/{model}"


def create_chat_llm(
    model: str,
    temperature: Optional[float] = None,
    max_tokens: Optional[int] = None,
) -> ChatLiteLLM:
    """
    Create LLM instance for a chat model

    Priority:
    1. Explicit parameters (temperature, max_tokens)
    2. Model preset defaults
    3. Global config defaults

    Args:
        model: Chat model identifier (e.g. "gpt-3.5-turbo")
        temperature: Temperature override
        max_tokens: Max tokens override

    Returns:
        Configured ChatLiteLLM instance
    """
    preset = MODEL_PRESETS.get(model, {})
    model_string = resolve_model_string(model)

    final_temp = temperature if temperature is not None else preset.get("temperature", settings.CHAT_TEMPERATURE)
    final_max_tokens = max_tokens if max_tokens is not None else preset.get("max_tokens", settings.CHAT_MAX_TOKENS)

    litellm_kwargs = {
        "model": model_string,
        "temperature": final_temp,
        "max_tokens": final_max_tokens,
        "timeout": settings.LLM_TIMEOUT,
    }

    # Add API key if needed
    if "openai" in model_string.lower() or model_string.startswith("gpt-") or model_string.startswith("o1"):
        litellm_kwargs["api_key"] = settings.OPENAI_API_KEY

    if settings.LLM_API_BASE:
        litellm_kwargs["api_base"] = settings.LLM_API_BASE

    logger.info(f"Creating LLM: model={model_string}, temp={final_temp}, max_tokens={final_max_tokens}")
    return ChatLiteLLM(**litellm_kwargs)

"""
Chat model factory.

Builds the streaming completion model for the configured vendor.

Dependencies: langchain_google_genai, langchain_aws
System role: Completion capability for the RAG chain
"""

import logging

from langchain_aws import ChatBedrockConverse
from langchain_core.language_models import BaseChatModel
from langchain_google_genai import ChatGoogleGenerativeAI

from docqa.configs.llm import LLMSettings
from docqa.core.exceptions import CompletionError

logger = logging.getLogger(__name__)


def build_chat_model(settings: LLMSettings) -> BaseChatModel:
    """
    Create the chat model used for answers.

    Args:
        settings: LLM settings

    Returns:
        BaseChatModel: ChatGoogleGenerativeAI or ChatBedrockConverse

    Raises:
        CompletionError: If the provider is unknown or the client cannot be built
    """
    provider = settings.provider.lower()
    logger.info(f"{__name__}:build_chat_model - provider={provider}, model={settings.model}")
    try:
        if provider == "google":
            kwargs = {}
            if settings.api_key is not None:
                kwargs["google_api_key"] = settings.api_key
            return ChatGoogleGenerativeAI(
                model=settings.model,
                temperature=settings.temperature,
                **kwargs,
            )
        if provider == "bedrock":
            return ChatBedrockConverse(
                model=settings.model,
                region_name=settings.region,
                temperature=settings.temperature,
            )
    except Exception as e:
        raise CompletionError(f"Could not initialise chat model: {e}", {"provider": provider}) from e

    raise CompletionError(
        f"Invalid LLM_PROVIDER: {provider}. Must be 'google' or 'bedrock'.",
        {"provider": provider},
    )

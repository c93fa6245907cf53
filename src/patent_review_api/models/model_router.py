"""Dynamic model routing for the document translation call."""

from typing import Any, Dict
from enum import Enum

from langchain_anthropic import ChatAnthropic
from langchain_google_genai import ChatGoogleGenerativeAI
from langchain_core.language_models import BaseChatModel

from ..config import get_settings


class SupportedModel(Enum):
    """Models that accept PDF input alongside a text prompt."""
    # Google
    GEMINI_2_5_FLASH = "gemini-2.5-flash"
    GEMINI_2_5_PRO = "gemini-2.5-pro"
    # Anthropic - use exact model IDs
    CLAUDE_SONNET_4_5_20250929 = "claude-sonnet-4-5-20250929"
    CLAUDE_HAIKU_4_5_20251001 = "claude-haiku-4-5-20251001"


GEMINI_MODELS = {
    SupportedModel.GEMINI_2_5_FLASH.value: {
        "provider": "Google",
        "description": "Gemini 2.5 Flash - Fast document translation (no thinking)",
        "capabilities": ["text", "pdf", "translation"],
        "context_window": 1048576,
    },
    SupportedModel.GEMINI_2_5_PRO.value: {
        "provider": "Google",
        "description": "Gemini 2.5 Pro - Slower, with thinking enabled",
        "capabilities": ["text", "pdf", "reasoning", "translation"],
        "context_window": 1048576,
    },
}

ANTHROPIC_MODELS = {
    SupportedModel.CLAUDE_SONNET_4_5_20250929.value: {
        "provider": "Anthropic",
        "description": "Claude Sonnet 4.5 (2025-09-29)",
        "capabilities": ["text", "pdf", "reasoning", "translation"],
        "context_window": 200000,
    },
    SupportedModel.CLAUDE_HAIKU_4_5_20251001.value: {
        "provider": "Anthropic",
        "description": "Claude Haiku 4.5 (2025-10-01)",
        "capabilities": ["text", "pdf", "translation"],
        "context_window": 200000,
    },
}


class ModelRouter:
    """Router for selecting and initializing language models by name."""

    def __init__(self):
        self.settings = get_settings()
        self._model_cache: Dict[str, BaseChatModel] = {}

    def get_model(self, model_name: str, **kwargs) -> BaseChatModel:
        """
        Get a language model instance based on the model name.

        Args:
            model_name: Name of the model to use
            **kwargs: Additional model configuration parameters

        Returns:
            Initialized language model instance

        Raises:
            ValueError: If model is not supported or API key is missing
        """
        cache_key = f"{model_name}_{hash(str(sorted(kwargs.items())))}"
        if cache_key in self._model_cache:
            return self._model_cache[cache_key]

        model = self._create_model(model_name, **kwargs)
        self._model_cache[cache_key] = model
        return model

    def _create_model(self, model_name: str, **kwargs) -> BaseChatModel:
        model_name = model_name.lower()

        # Defaults; callers may override via kwargs
        default_configs = {
            "temperature": kwargs.get("temperature", 0.2),
            "max_tokens": kwargs.get("max_tokens", 32000),
        }

        if model_name in GEMINI_MODELS:
            return self._create_gemini_model(model_name, default_configs, **kwargs)
        elif model_name in ANTHROPIC_MODELS:
            return self._create_anthropic_model(model_name, default_configs, **kwargs)
        else:
            raise ValueError(f"Unsupported model: {model_name}")

    def _create_gemini_model(self, model_name: str, default_configs: dict, **kwargs) -> ChatGoogleGenerativeAI:
        """Create a Google Gemini model instance."""
        # Allow per-call API key override via kwargs['api_key']
        user_api_key = kwargs.pop("api_key", None)
        api_key = user_api_key or self.settings.gemini_api_key
        if not api_key:
            raise ValueError("GEMINI_API_KEY is required for Gemini models")

        # Plain flash: no thinking; pro keeps the provider default
        thinking = {"thinking_budget": 0} if model_name == SupportedModel.GEMINI_2_5_FLASH.value else {}

        return ChatGoogleGenerativeAI(
            google_api_key=api_key,
            model=model_name,
            temperature=default_configs["temperature"],
            max_output_tokens=default_configs["max_tokens"],
            **thinking,
            **{k: v for k, v in kwargs.items() if k not in ["temperature", "max_tokens"]}
        )

    def _create_anthropic_model(self, model_name: str, default_configs: dict, **kwargs) -> ChatAnthropic:
        """Create an Anthropic (Claude) model instance."""
        user_api_key = kwargs.pop("api_key", None)
        api_key = user_api_key or self.settings.anthropic_api_key
        if not api_key:
            raise ValueError("ANTHROPIC_API_KEY is required for Claude models")

        return ChatAnthropic(
            anthropic_api_key=api_key,
            model=model_name,
            temperature=default_configs["temperature"],
            max_tokens=default_configs["max_tokens"],
            **{k: v for k, v in kwargs.items() if k not in ["temperature", "max_tokens"]}
        )

    def get_available_models(self) -> Dict[str, Dict[str, Any]]:
        """
        Get information about available models based on configured API keys.

        Returns:
            Dictionary of available models and their capabilities
        """
        available = {}
        if self.settings.gemini_api_key:
            available.update(GEMINI_MODELS)
        if self.settings.anthropic_api_key:
            available.update(ANTHROPIC_MODELS)
        return available

    def is_supported(self, model_name: str) -> bool:
        name = model_name.lower()
        return name in GEMINI_MODELS or name in ANTHROPIC_MODELS

    def validate_model_availability(self, model_name: str) -> bool:
        """Check if a model is available based on API key configuration."""
        return model_name.lower() in self.get_available_models()


# Global model router instance
model_router = ModelRouter()


def get_model_router() -> ModelRouter:
    """Get the global model router instance."""
    return model_router

"""LLM completion clients for OpenAI and Google Gemini."""

import logging
from abc import ABC, abstractmethod
from typing import Optional

from google.genai import Client
from google.genai import types
from openai import OpenAI, OpenAIError

from services.errors import UpstreamUnavailableError

logger = logging.getLogger(__name__)


class LLMClient(ABC):
    """A text-in, text-out completion endpoint."""

    #: Environment variable that holds this provider's key
    api_key_env: str = ""

    @abstractmethod
    def get_provider_name(self) -> str:
        """Provider name (e.g., "openai", "gemini")."""

    @abstractmethod
    def is_configured(self) -> bool:
        """Check if the client has an API key."""

    @abstractmethod
    def _complete(self, prompt: str, model: str, temperature: float) -> str:
        """Provider-specific completion call."""

    def require_configured(self) -> None:
        """Raise UpstreamUnavailableError naming the missing key."""
        if not self.is_configured():
            raise UpstreamUnavailableError(
                f"{self.get_provider_name().title()} API key not configured. "
                f"Please set {self.api_key_env} environment variable."
            )

    def complete(self, prompt: str, model: Optional[str] = None, temperature: float = 0.7) -> str:
        """Send a single-turn prompt and return the response text.

        Args:
            prompt: Full prompt text
            model: Model override (defaults to the client's model)
            temperature: Sampling temperature

        Returns:
            Raw response text

        Raises:
            UpstreamUnavailableError: If the key is missing, the call fails,
                or the response is empty
        """
        self.require_configured()
        model = model or self.default_model

        try:
            text = self._complete(prompt, model, temperature)
        except UpstreamUnavailableError:
            raise
        except Exception as e:
            logger.error(f"{self.get_provider_name()} completion failed: {e}")
            raise UpstreamUnavailableError(
                f"{self.get_provider_name().title()} request failed", details=str(e)
            ) from e

        if not text or not text.strip():
            raise UpstreamUnavailableError(
                f"{self.get_provider_name().title()} returned an empty response"
            )
        return text

    @property
    @abstractmethod
    def default_model(self) -> str:
        """Model used when complete() is called without one."""


class OpenAILLMClient(LLMClient):
    """Chat completions via the official openai SDK."""

    api_key_env = "OPENAI_API_KEY"

    def __init__(self, api_key: Optional[str], model_name: str = "gpt-4o-mini"):
        self.model_name = model_name
        self.client = OpenAI(api_key=api_key) if api_key else None
        if self.client:
            logger.info(f"Initialized OpenAI client with model: {model_name}")

    def get_provider_name(self) -> str:
        return "openai"

    def is_configured(self) -> bool:
        return self.client is not None

    @property
    def default_model(self) -> str:
        return self.model_name

    def _complete(self, prompt: str, model: str, temperature: float) -> str:
        try:
            response = self.client.chat.completions.create(
                model=model,
                messages=[{"role": "user", "content": prompt}],
                temperature=temperature,
            )
        except OpenAIError as e:
            raise UpstreamUnavailableError("OpenAI request failed", details=str(e)) from e

        return response.choices[0].message.content or ""


class GeminiLLMClient(LLMClient):
    """Content generation via Google GenAI."""

    api_key_env = "GEMINI_API_KEY"

    def __init__(self, api_key: Optional[str], model_name: str = "gemini-2.5-flash"):
        self.model_name = model_name
        self.client = Client(api_key=api_key) if api_key else None
        if self.client:
            logger.info(f"Initialized Gemini client with model: {model_name}")

    def get_provider_name(self) -> str:
        return "gemini"

    def is_configured(self) -> bool:
        return self.client is not None

    @property
    def default_model(self) -> str:
        return self.model_name

    def _complete(self, prompt: str, model: str, temperature: float) -> str:
        response = self.client.models.generate_content(
            model=model,
            contents=prompt,
            config=types.GenerateContentConfig(temperature=temperature),
        )
        return response.text or ""


def create_llm_client(config: dict) -> LLMClient:
    """Build the LLM client selected by LLM_PROVIDER."""
    provider = config.get("llm_provider", "openai")
    if provider == "gemini":
        return GeminiLLMClient(
            api_key=config.get("gemini_api_key"),
            model_name=config.get("gemini_model", "gemini-2.5-flash"),
        )
    if provider == "openai":
        return OpenAILLMClient(
            api_key=config.get("openai_api_key"),
            model_name=config.get("analysis_model", "gpt-4o-mini"),
        )
    raise ValueError(f"Unknown LLM provider '{provider}'")

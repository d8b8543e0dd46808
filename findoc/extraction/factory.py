from typing import ClassVar

from findoc.config.settings import Settings
from findoc.extraction.example_client_adapter import ExampleVisionClientAdapter
from findoc.extraction.extractor import FieldExtractor
from findoc.extraction.openai_client_adapter import OpenAIVisionClientAdapter


class ExtractorFactory:
    """Creates the configured field extractor."""

    OPENAI_COMPATIBLE_BASE_URLS: ClassVar[dict[str, str]] = {
        "openrouter": "https://openrouter.ai/api/v1",
        "together": "https://api.together.xyz/v1",
        "ollama": "http://localhost:11434/v1",
    }

    @classmethod
    def create(cls, settings: Settings) -> FieldExtractor:
        """Create a configured extractor from application settings."""
        provider = settings.extraction_provider.lower()
        if provider == "example":
            return FieldExtractor(client=ExampleVisionClientAdapter(), model="example")
        client = OpenAIVisionClientAdapter(
            api_key=settings.openai_api_key,
            timeout_seconds=settings.openai_timeout_seconds,
            base_url=cls._resolve_base_url(provider, settings),
        )
        return FieldExtractor(
            client=client,
            model=settings.openai_model_name,
            temperature=settings.openai_temperature,
            max_tokens=settings.openai_max_tokens,
        )

    @classmethod
    def _resolve_base_url(cls, provider: str, settings: Settings) -> str | None:
        configured = settings.openai_base_url.strip()
        if provider == "openai":
            return configured or None
        if provider == "openai_compatible":
            if not configured:
                raise ValueError(
                    "openai_base_url is required for extraction_provider=openai_compatible"
                )
            return configured
        default_base_url = cls.OPENAI_COMPATIBLE_BASE_URLS.get(provider)
        if default_base_url is not None:
            return configured or default_base_url
        supported = ["example", "openai", "openai_compatible", *sorted(cls.OPENAI_COMPATIBLE_BASE_URLS)]
        raise ValueError(
            f"Unknown extraction provider '{provider}'. Choose from: {supported}"
        )

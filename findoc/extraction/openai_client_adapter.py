import httpx
import openai

from findoc.extraction.client_base import BaseVisionClient
from findoc.extraction.exceptions import ExtractionError, ExtractionNetworkError
from findoc.processor.exceptions import ConfigError


class OpenAIVisionClientAdapter(BaseVisionClient):
    """Vision client adapter built on the OpenAI-compatible chat API."""

    def __init__(
        self,
        *,
        api_key: str,
        timeout_seconds: int,
        base_url: str | None = None,
    ) -> None:
        self._api_key = api_key
        self._client = openai.OpenAI(
            api_key=api_key,
            timeout=timeout_seconds,
            base_url=base_url,
            max_retries=0,
        )

    def create_vision_completion(
        self,
        *,
        model: str,
        temperature: float,
        max_tokens: int,
        system_prompt: str,
        user_prompt: str,
        image_url: str,
    ) -> str:
        if not self._api_key:
            raise ConfigError("openai_api_key is required for vision extraction")
        try:
            response = self._client.chat.completions.create(
                model=model,
                temperature=temperature,
                max_tokens=max_tokens,
                messages=[
                    {"role": "system", "content": system_prompt},
                    {
                        "role": "user",
                        "content": [
                            {"type": "text", "text": user_prompt},
                            {"type": "image_url", "image_url": {"url": image_url}},
                        ],
                    },
                ],
            )
        except (openai.APIConnectionError, httpx.ConnectError, httpx.TimeoutException) as exc:
            raise ExtractionNetworkError(f"Vision provider network error: {exc}") from exc
        except openai.AuthenticationError as exc:
            raise ConfigError(f"Vision provider rejected credentials: {exc}") from exc
        except openai.APIError as exc:
            raise ExtractionNetworkError(f"Vision provider API error: {exc}") from exc

        if not response.choices:
            raise ExtractionError("Vision model returned no choices")
        content = response.choices[0].message.content
        if content is None:
            raise ExtractionError("Vision model returned empty response")
        return content

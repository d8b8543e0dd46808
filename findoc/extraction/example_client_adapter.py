"""Example vision client adapter.

Use this module as a reference when implementing new provider adapters.
Implement BaseVisionClient and register the provider in ExtractorFactory.
"""

import json

from findoc.extraction.client_base import BaseVisionClient


class ExampleVisionClientAdapter(BaseVisionClient):
    """Example adapter that returns a fixed reply. No network calls."""

    def __init__(self, response: dict[str, object] | None = None) -> None:
        self._response = json.dumps(response if response is not None else {})

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
        _ = model, temperature, max_tokens, system_prompt, user_prompt, image_url
        return self._response

from abc import ABC, abstractmethod


class BaseVisionClient(ABC):
    """Contract for provider-specific vision model clients."""

    @abstractmethod
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
        """Return provider response as plain text."""

"""Vision-model field extractor: one page image in, one raw JSON object out."""

import json
from pathlib import Path
from typing import ClassVar

from findoc.extraction.client_base import BaseVisionClient
from findoc.extraction.exceptions import ExtractionError
from findoc.extraction.prompt_loader import load_prompt
from findoc.logging.logger import Log
from findoc.rendering.models import PageImage


class FieldExtractor:
    """Extracts untrusted structured fields from a page image using a vision model."""

    KINDS: ClassVar[tuple[str, ...]] = ("paystub", "bank_statement")

    USER_PROMPTS: ClassVar[dict[str, str]] = {
        "paystub": (
            "Extract the gross pay, net pay, and pay period dates from this paystub. "
            "Return only a raw JSON object with the specified fields."
        ),
        "bank_statement": (
            "Extract ALL transaction details from this bank statement page, including "
            "the exact date, description, category, amount, and running balance of each. "
            "Return only a raw JSON object with the specified fields."
        ),
    }

    def __init__(
        self,
        *,
        client: BaseVisionClient,
        model: str,
        temperature: float = 0.0,
        max_tokens: int = 4096,
        prompt_dir: Path | None = None,
    ) -> None:
        self._client = client
        self._model = model
        self._temperature = max(0.0, min(0.2, temperature))
        self._max_tokens = max_tokens
        self._system_prompts = {kind: load_prompt(kind, prompt_dir) for kind in self.KINDS}

    def extract(self, page: PageImage, kind: str) -> dict[str, object]:
        """Run one vision call for a page.

        Raises:
            ExtractionError: on provider failure or a reply that is not a JSON object.
        """
        system_prompt = self._system_prompts.get(kind)
        if system_prompt is None:
            raise ExtractionError(f"Unsupported document kind '{kind}'")

        raw_response = self._client.create_vision_completion(
            model=self._model,
            temperature=self._temperature,
            max_tokens=self._max_tokens,
            system_prompt=system_prompt,
            user_prompt=self.USER_PROMPTS[kind],
            image_url=page.data_url,
        )
        Log.debug(f"Vision raw response for page {page.page_number}:\n{raw_response}")
        return self.parse_json(raw_response)

    @staticmethod
    def parse_json(raw: str) -> dict[str, object]:
        cleaned = raw.strip()
        if cleaned.startswith("```"):
            lines = cleaned.splitlines()
            if lines and lines[0].startswith("```"):
                lines = lines[1:]
            if lines and lines[-1].strip() == "```":
                lines = lines[:-1]
            cleaned = "\n".join(lines)

        try:
            parsed = json.loads(cleaned)
        except json.JSONDecodeError as exc:
            raise ExtractionError(f"Invalid JSON response: {exc}") from exc

        if not isinstance(parsed, dict):
            raise ExtractionError("JSON response must be an object")
        return parsed

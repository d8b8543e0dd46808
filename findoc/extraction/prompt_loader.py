from pathlib import Path

from findoc.extraction.exceptions import ExtractionError

_DEFAULT_PROMPT_DIR = Path(__file__).parent / "prompts"


def load_prompt(kind: str, prompt_dir: Path | None = None) -> str:
    """Load the system prompt for a document kind.

    Args:
        kind: Document kind, e.g. "paystub" or "bank_statement".
        prompt_dir: Directory holding {kind}_prompt.txt files.
                    Defaults to the bundled prompts directory.

    Raises:
        ExtractionError: if the file cannot be read.
    """
    directory = prompt_dir if prompt_dir is not None else _DEFAULT_PROMPT_DIR
    path = directory / f"{kind}_prompt.txt"
    try:
        return path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ExtractionError(f"Failed to load prompt for '{kind}': {exc}") from exc

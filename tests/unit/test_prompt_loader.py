"""Tests for system prompt loading."""

from pathlib import Path

import pytest

from findoc.extraction.exceptions import ExtractionError
from findoc.extraction.prompt_loader import load_prompt


class TestLoadPrompt:
    def test_loads_bundled_paystub_prompt(self) -> None:
        prompt = load_prompt("paystub")
        assert "gross_pay" in prompt
        assert "pay_period_end" in prompt

    def test_loads_bundled_bank_statement_prompt(self) -> None:
        prompt = load_prompt("bank_statement")
        assert "transactions" in prompt
        assert "ending_balance" in prompt

    def test_loads_from_custom_dir(self, tmp_path: Path) -> None:
        (tmp_path / "paystub_prompt.txt").write_text("Custom prompt", encoding="utf-8")
        assert load_prompt("paystub", tmp_path) == "Custom prompt"

    def test_missing_file_raises(self, tmp_path: Path) -> None:
        with pytest.raises(ExtractionError, match="Failed to load prompt"):
            load_prompt("paystub", tmp_path)

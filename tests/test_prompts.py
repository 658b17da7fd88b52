"""Unit tests for the prompt builder."""
import pytest

from wanderlust.locale import Language
from wanderlust.prompts import URDU_DIRECTIVE, clear_cache, instruction_for, load_prompt


@pytest.fixture(autouse=True)
def fresh_prompt_cache():
    clear_cache()
    yield
    clear_cache()


class TestInstructionFor:
    """Tests for instruction_for."""

    def test_base_instruction_content(self):
        instruction = instruction_for(Language.EN)

        assert instruction.startswith("You are WanderLust")
        assert "Google Maps tool" in instruction
        assert "Use Markdown formatting" in instruction
        assert "Do not provide medical or legal advice." in instruction
        assert "steer them back to travel topics" in instruction
        assert URDU_DIRECTIVE not in instruction

    def test_secondary_language_appends_directive(self):
        english = instruction_for(Language.EN)
        urdu = instruction_for(Language.UR)

        assert urdu == f"{english}\n\n{URDU_DIRECTIVE}"

    def test_accepts_plain_language_codes(self):
        assert instruction_for("ur") == instruction_for(Language.UR)

    def test_toggling_twice_restores_instruction(self):
        language = Language.EN
        before = instruction_for(language)

        language = language.toggled().toggled()

        assert instruction_for(language) == before

    def test_working_directory_override(self, tmp_path, monkeypatch):
        (tmp_path / "prompts").mkdir()
        (tmp_path / "prompts" / "system.txt").write_text("You are a test guide.\n", encoding="utf-8")
        monkeypatch.chdir(tmp_path)

        assert instruction_for(Language.EN) == "You are a test guide."

    def test_missing_prompt(self):
        with pytest.raises(FileNotFoundError, match="Prompt 'nope' not found"):
            load_prompt("nope")

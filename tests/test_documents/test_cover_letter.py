"""Tests for the cover letter writer and its output format."""

from __future__ import annotations

import pytest

from freelanly.clients.llm_client import LLMResponse
from freelanly.documents.cover_letter import (
    CLOSING,
    OPENING,
    CoverLetterRequest,
    CoverLetterWriter,
    count_words,
    format_letter,
    split_paragraphs,
)
from freelanly.errors import GenerationError, ValidationError
from freelanly.models.resume import SelectedProject


@pytest.fixture
def request_() -> CoverLetterRequest:
    return CoverLetterRequest(
        name="Jane Doe",
        job_title="Backend Engineer",
        target_position="Senior Backend Engineer",
        target_company="Acme",
        skills=["Python", "PostgreSQL"],
        projects=[
            SelectedProject(id=i, name=f"Project {i}", description=f"Did thing {i}")
            for i in range(5)
        ],
        job_description="Own our payments API.",
    )


def _sentences(n: int, word: str = "word") -> str:
    return " ".join(f"{word} {word} {word} {word} end." for _ in range(n))


class TestBuildPrompt:
    def test_includes_role_company_and_skills(self, writer: CoverLetterWriter, request_):
        prompt = writer.build_prompt(request_)
        assert "Senior Backend Engineer position at Acme" in prompt
        assert "Skills: Python, PostgreSQL" in prompt
        assert "Own our payments API." in prompt
        assert f'Begin with "{OPENING}"' in prompt

    def test_caps_projects(self, writer: CoverLetterWriter, request_):
        prompt = writer.build_prompt(request_)
        assert "Project 2" in prompt
        assert "Project 3" not in prompt

    def test_defaults_for_missing_inputs(self, writer: CoverLetterWriter):
        prompt = writer.build_prompt(
            CoverLetterRequest(target_position="Dev", target_company="Acme")
        )
        assert "Skills: Not specified" in prompt
        assert "No specific projects provided." in prompt


class TestWrite:
    async def test_returns_formatted_letter(self, writer: CoverLetterWriter, request_, mock_llm_client):
        letter, response = await writer.write(request_)
        paragraphs = split_paragraphs(letter)
        assert paragraphs[0] == OPENING
        assert paragraphs[-1] == f"{CLOSING}\nJane Doe"
        assert len(paragraphs) == 5
        assert response.input_tokens == 400
        kwargs = mock_llm_client.generate.call_args.kwargs
        assert kwargs["max_tokens"] == 800
        assert kwargs["temperature"] == 0.7

    async def test_missing_company_raises_before_call(self, writer, mock_llm_client):
        with pytest.raises(ValidationError) as exc:
            await writer.write(CoverLetterRequest(target_position="Dev"))
        assert exc.value.fields == ["target_company"]
        mock_llm_client.generate.assert_not_called()

    async def test_model_failure_is_generation_error(self, failing_llm_client, request_):
        writer = CoverLetterWriter(failing_llm_client)
        with pytest.raises(GenerationError) as exc:
            await writer.write(request_)
        assert isinstance(exc.value.__cause__, ConnectionError)
        assert failing_llm_client.generate.await_count == 1

    async def test_short_reply_is_generation_error(self, mock_llm_client, request_):
        mock_llm_client.generate.return_value = LLMResponse(
            text="Dear Hiring Manager,\n\nOnly one paragraph.\n\nSincerely,\nJane",
            input_tokens=10,
            output_tokens=10,
        )
        with pytest.raises(GenerationError):
            await CoverLetterWriter(mock_llm_client).write(request_)


class TestFormatLetter:
    def test_reapplies_greeting_and_signoff(self):
        raw = "First para.\n\nSecond para.\n\nThird para."
        letter = format_letter(raw, "Jane", 300)
        assert letter == (
            "Dear Hiring Manager,\n\nFirst para.\n\nSecond para.\n\nThird para.\n\nSincerely,\nJane"
        )

    def test_replaces_model_salutation(self):
        raw = "Dear Acme Team,\n\nOne.\n\nTwo.\n\nThree.\n\nBest regards,\nJ."
        letter = format_letter(raw, "Jane", 300)
        assert "Acme Team" not in letter
        assert letter.endswith("Sincerely,\nJane")
        assert "Best regards" not in letter

    @pytest.mark.parametrize(
        "closing",
        [
            "Warm regards,\nJane Doe",
            "Best,\nJane Doe",
            "Cheers,",
            "Third paragraph here.\nWarm regards,\nJane Doe",
        ],
    )
    def test_unlisted_closing_is_dropped(self, closing: str):
        raw = "Dear Hiring Manager,\n\nFirst one.\n\nSecond one.\n\n"
        if not closing.startswith("Third"):
            raw += "Third paragraph here.\n\n"
        raw += closing
        letter = format_letter(raw, "Jane Doe", 300)
        body = split_paragraphs(letter)[1:-1]
        assert body[-1] == "Third paragraph here."
        assert letter.count("Jane Doe") == 1
        assert letter.endswith(f"{CLOSING}\nJane Doe")

    def test_salutation_on_same_block_as_body(self):
        raw = "Dear Hiring Manager,\nOne.\n\nTwo.\n\nThree."
        assert split_paragraphs(format_letter(raw, "Jane", 300))[1] == "One."

    def test_extra_paragraphs_merged_into_last(self):
        raw = "One.\n\nTwo.\n\nThree.\n\nFour."
        body = split_paragraphs(format_letter(raw, "Jane", 300))[1:-1]
        assert body == ["One.", "Two.", "Three. Four."]

    def test_word_ceiling_truncates_at_sentence(self):
        raw = "\n\n".join([_sentences(4), _sentences(4), _sentences(4)])
        letter = format_letter(raw, "Jane", 50)
        body = split_paragraphs(letter)[1:-1]
        assert len(body) == 3
        assert sum(count_words(p) for p in body) <= 50
        assert body[-1].endswith("end.")

    def test_cannot_fit_raises(self):
        raw = "\n\n".join([_sentences(10), _sentences(1), _sentences(1)])
        with pytest.raises(GenerationError):
            format_letter(raw, "Jane", 20)

    def test_fallback_signature(self):
        letter = format_letter("One.\n\nTwo.\n\nThree.", "  ", 300)
        assert letter.endswith("Sincerely,\nThe Applicant")

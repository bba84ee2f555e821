"""Cover letter writer: builds the model instruction and enforces the letter format."""

from __future__ import annotations

import logging
import re

from pydantic import BaseModel, Field

from freelanly.clients.llm_client import DEFAULT_MODEL, LLMClient, LLMResponse
from freelanly.errors import GenerationError, ValidationError
from freelanly.models.resume import ResumeDraft, SelectedProject

logger = logging.getLogger(__name__)

OPENING = "Dear Hiring Manager,"
CLOSING = "Sincerely,"
BODY_PARAGRAPHS = 3

SYSTEM_PROMPT = """\
You are a professional cover letter writer for freelancers applying to \
specific roles. You write concise, specific letters grounded only in the \
facts you are given."""

_SALUTATION_RE = re.compile(r"^\s*dear\b[^\n]{0,60},\s*$", re.IGNORECASE)
_SIGNOFF_RE = re.compile(
    r"^\s*(sincerely|best regards|kind regards|regards|yours (truly|sincerely))\b",
    re.IGNORECASE,
)
_SENTENCE_END_RE = re.compile(r"[.!?](?=\s|$)")
_CLOSING_WORDS = 4


class CoverLetterRequest(BaseModel):
    name: str = ""
    job_title: str = ""
    target_position: str = ""
    target_company: str = ""
    skills: list[str] = Field(default_factory=list)
    projects: list[SelectedProject] = Field(default_factory=list)
    job_description: str = ""

    @classmethod
    def from_draft(cls, draft: ResumeDraft) -> CoverLetterRequest:
        return cls(
            name=draft.name,
            job_title=draft.professional_title,
            target_position=draft.target_position,
            target_company=draft.target_company,
            skills=draft.skills,
            projects=draft.selected_projects,
            job_description=draft.job_description,
        )

    def check_required(self) -> None:
        missing = [
            name for name in ("target_position", "target_company")
            if not getattr(self, name).strip()
        ]
        if missing:
            raise ValidationError("Target position and company are required", missing)


class CoverLetterWriter:
    def __init__(
        self,
        llm: LLMClient,
        model: str = DEFAULT_MODEL,
        *,
        max_projects: int = 3,
        max_words: int = 300,
        temperature: float = 0.7,
        max_tokens: int = 800,
    ):
        self.llm = llm
        self.model = model
        self.max_projects = max_projects
        self.max_words = max_words
        self.temperature = temperature
        self.max_tokens = max_tokens

    def build_prompt(self, request: CoverLetterRequest) -> str:
        projects = request.projects[: self.max_projects]
        project_lines = "\n".join(
            f"Project: {p.name} - {p.description or 'No description'}" for p in projects
        )
        skills = ", ".join(request.skills) if request.skills else "Not specified"
        name = request.name or "the applicant"

        return f"""Write a professional, concise cover letter for a freelancer named {name}
who is applying for the {request.target_position} position at {request.target_company}.

Current Job Title: {request.job_title or "Freelancer"}

Skills: {skills}

Recent Projects:
{project_lines or "No specific projects provided."}

Job Description:
{request.job_description or "Not provided."}

Requirements:
- Exactly {BODY_PARAGRAPHS} body paragraphs separated by blank lines.
- Begin with "{OPENING}" on its own line.
- End with "{CLOSING}" followed by "{name}" on the next line.
- At most {self.max_words} words, not counting the greeting and sign-off.
- Do not repeat the resume itself (no contact details, no lists of dates or employers).
- Output only the letter text."""

    async def write(self, request: CoverLetterRequest) -> tuple[str, LLMResponse]:
        """Generate a letter for ``request``.

        Raises ValidationError before any model call when the target role or
        company is missing, and GenerationError when the call fails or the
        reply cannot be shaped into the letter format. Nothing is retried.
        """
        request.check_required()
        prompt = self.build_prompt(request)
        try:
            response = await self.llm.generate(
                prompt=prompt,
                system=SYSTEM_PROMPT,
                model=self.model,
                temperature=self.temperature,
                max_tokens=self.max_tokens,
            )
        except Exception as e:
            logger.warning("Cover letter model call failed: %s", e)
            raise GenerationError("Failed to generate cover letter. Please try again.") from e

        letter = format_letter(response.text, request.name, self.max_words)
        logger.info(
            "Cover letter generated for %s at %s (%d words)",
            request.target_position,
            request.target_company,
            count_words(letter),
        )
        return letter, response


def count_words(text: str) -> int:
    return len(text.split())


def split_paragraphs(text: str) -> list[str]:
    return [p.strip() for p in re.split(r"\n\s*\n", text.strip()) if p.strip()]


def format_letter(raw: str, name: str, max_words: int) -> str:
    """Shape model output into greeting, three body paragraphs and sign-off."""
    body = _body_paragraphs(raw)
    if len(body) < BODY_PARAGRAPHS:
        raise GenerationError(
            f"Cover letter had {len(body)} body paragraphs, expected {BODY_PARAGRAPHS}"
        )
    if len(body) > BODY_PARAGRAPHS:
        body = body[: BODY_PARAGRAPHS - 1] + [" ".join(body[BODY_PARAGRAPHS - 1:])]
    body = _fit_word_ceiling(body, max_words)
    signature = name.strip() or "The Applicant"
    return "\n\n".join([OPENING, *body, f"{CLOSING}\n{signature}"])


def _drop_closing(lines: list[str]) -> list[str]:
    """Drop a trailing "<closing>," line and optional signature line.

    Catches closings the sign-off pattern does not list ("Warm regards,",
    "Best,", "Cheers,").
    """
    for size in (2, 1):
        if len(lines) < size:
            continue
        tail = [line.strip() for line in lines[-size:]]
        if tail[0].endswith(",") and all(len(line.split()) <= _CLOSING_WORDS for line in tail):
            return lines[:-size]
    return lines


def _body_paragraphs(raw: str) -> list[str]:
    blocks = [paragraph.splitlines() for paragraph in split_paragraphs(raw)]
    if blocks:
        blocks[-1] = _drop_closing(blocks[-1])
    paragraphs = []
    for lines in blocks:
        if lines and _SALUTATION_RE.match(lines[0]):
            lines = lines[1:]
        signoff = next((i for i, line in enumerate(lines) if _SIGNOFF_RE.match(line)), None)
        if signoff is not None:
            lines = lines[:signoff]
        text = " ".join(line.strip() for line in lines if line.strip())
        if text:
            paragraphs.append(text)
        if signoff is not None:
            # everything after the sign-off is the signature
            break
    return paragraphs


def _fit_word_ceiling(body: list[str], max_words: int) -> list[str]:
    """Trim from the end until the body fits; prefer cutting at a sentence end."""
    if sum(count_words(p) for p in body) <= max_words:
        return body
    fitted: list[str] = []
    remaining = max_words
    for paragraph in body:
        words = paragraph.split()
        if len(words) <= remaining:
            fitted.append(paragraph)
            remaining -= len(words)
            continue
        cut = " ".join(words[:remaining])
        ends = list(_SENTENCE_END_RE.finditer(cut))
        if ends:
            cut = cut[: ends[-1].end()]
        fitted.append(cut)
        remaining = 0
    if len(fitted) < BODY_PARAGRAPHS or not all(fitted):
        raise GenerationError(f"Cover letter cannot fit within {max_words} words")
    return fitted

import logging
from dataclasses import dataclass

from app.config import get_settings
from app.models.summary import SummaryRequestConfig
from app.services.llm_service import LLMService, get_llm_service

logger = logging.getLogger(__name__)

DOCUMENT_SEPARATOR = "\n\n=== Next Document ===\n\n"
ALL_SUBJECTS = "all subjects covered in the notes"

CLASSIC_SYSTEM_PROMPT = (
    "You are a helpful assistant that creates well-structured, comprehensive resumes "
    "from lecture notes. Your output should be clear, organized, and focused on the "
    "requested subjects."
)

CLASSIC_TEMPLATE = """Please analyze the following lecture notes and create a comprehensive resume.
Focus on these subjects: {subjects}.
Source language: {source_language}
Target language: {target_language}

The resume should:
1. Identify and summarize key concepts
2. Highlight important definitions and explanations
3. Note any significant examples or case studies
4. Organize the information in a clear, structured format

Here are the lecture notes:

{notes}"""

STRUCTURED_SYSTEM_PROMPT = """You are an expert academic tutor who turns lecture notes into study resumes.
Write in a neutral, precise tone. Use Markdown headings for sections, bullet points for facts,
and nested bullets for supporting detail. Never invent content that is not in the notes.
Always answer in the requested target language."""

STRUCTURED_TEMPLATE = """Create a structured resume of the lecture notes below.

Subjects to focus on: {subjects}
The notes are written in {source_language}. Write the resume in {target_language}.

Structure the resume as follows:
# Overview
- One short paragraph on what the notes cover

# One section per subject
## Key concepts
- Each concept as a bullet, with nested bullets for details
## Definitions
- Term: definition
## Examples and case studies
- Notable examples, with the concept they illustrate

# Summary
- The most important takeaways, as a short bulleted list

Lecture notes:

{notes}"""


@dataclass(frozen=True)
class SummaryProfile:
    system_prompt: str
    template: str
    temperature: float
    max_tokens: int
    top_p: float | None = None


PROFILES: dict[str, SummaryProfile] = {
    "classic": SummaryProfile(
        system_prompt=CLASSIC_SYSTEM_PROMPT,
        template=CLASSIC_TEMPLATE,
        temperature=0.7,
        max_tokens=4000,
    ),
    "structured": SummaryProfile(
        system_prompt=STRUCTURED_SYSTEM_PROMPT,
        template=STRUCTURED_TEMPLATE,
        temperature=0.5,
        max_tokens=8000,
        top_p=0.9,
    ),
}


def get_profile(name: str) -> SummaryProfile:
    try:
        return PROFILES[name]
    except KeyError:
        raise ValueError(
            f"Unknown summary profile '{name}'. Available: {', '.join(PROFILES)}"
        ) from None


def build_prompt(texts: list[str], config: SummaryRequestConfig, profile: SummaryProfile) -> str:
    """Render the user prompt: config interpolated, texts joined in order."""
    subjects = ", ".join(config.subjects) if config.subjects else ALL_SUBJECTS
    return profile.template.format(
        subjects=subjects,
        source_language=config.source_language,
        target_language=config.target_language,
        notes=DOCUMENT_SEPARATOR.join(texts),
    )


class SummaryService:
    def __init__(self, llm: LLMService, profile: SummaryProfile):
        self.llm = llm
        self.profile = profile

    async def generate_resume(self, texts: list[str], config: SummaryRequestConfig) -> str:
        prompt = build_prompt(texts, config, self.profile)

        logger.info("Calling %s for resume (%d chars of prompt)", self.llm.model, len(prompt))
        resume = await self.llm.chat_completion(
            messages=[{"role": "user", "content": prompt}],
            system_prompt=self.profile.system_prompt,
            max_tokens=self.profile.max_tokens,
            temperature=self.profile.temperature,
            top_p=self.profile.top_p,
        )
        logger.info("Resume received (%d chars)", len(resume))
        return resume


def get_summary_service() -> SummaryService:
    settings = get_settings()
    return SummaryService(get_llm_service(), get_profile(settings.summary_profile))

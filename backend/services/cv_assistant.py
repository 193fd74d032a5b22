"""CV summaries, upgrade suggestions and rewrites."""

import logging
import re

from services import gemini_client, prompt_builder
from services.gemini_client import LLMResponseError

logger = logging.getLogger(__name__)

_UPGRADE_REQUEST_RE = re.compile(r"improve|suggest|upgrade", re.IGNORECASE)
_SUMMARY_RE = re.compile(r"summary\s*[:=\-]?\s*([\s\S]*?)skills", re.IGNORECASE)
_SKILLS_RE = re.compile(r"skills\s*[:=\-]?\s*([\s\S]*)", re.IGNORECASE)


def is_upgrade_request(cv_text: str) -> bool:
    return bool(_UPGRADE_REQUEST_RE.search(cv_text))


def parse_summary_fallback(content: str) -> tuple[str, list[str]]:
    """Pull summary and skills out of a free-text reply."""
    summary_match = _SUMMARY_RE.search(content)
    skills_match = _SKILLS_RE.search(content)
    summary = summary_match.group(1).strip() if summary_match else ""
    skills: list[str] = []
    if skills_match:
        skills = [s.strip() for s in re.split(r",|\n|\s+", skills_match.group(1)) if s.strip()]
    return summary, skills


async def extract_cv_info(cv_text: str) -> dict:
    """Summarize a CV, or suggest upgrades if the text asks for them.

    Returns {"upgrade": ...} or {"summary": ..., "skills": [...]}.
    """
    upgrade = is_upgrade_request(cv_text)
    prompt = (
        prompt_builder.build_cv_upgrade_prompt(cv_text)
        if upgrade
        else prompt_builder.build_cv_summary_prompt(cv_text)
    )
    content, _ = await gemini_client.generate_text(
        prompt,
        system=prompt_builder.RECRUITER_SYSTEM,
        temperature=0.4,
        max_tokens=300,
    )

    try:
        parsed = gemini_client.parse_json_response(content)
    except LLMResponseError:
        parsed = None
    if not isinstance(parsed, dict):
        logger.info("CV info reply was not JSON, using text fallback")
        if upgrade:
            return {"upgrade": content}
        summary, skills = parse_summary_fallback(content)
        return {"summary": summary, "skills": skills}

    if upgrade:
        return {"upgrade": parsed.get("upgrade") or content}
    skills = parsed.get("skills") or []
    if not isinstance(skills, list):
        skills = [str(skills)]
    return {"summary": parsed.get("summary") or "", "skills": [str(s) for s in skills]}


async def improve_cv(cv_text: str) -> str:
    prompt = prompt_builder.build_improve_cv_prompt(cv_text)
    improved, _ = await gemini_client.generate_text(
        prompt,
        system=prompt_builder.RESUME_WRITER_SYSTEM,
        temperature=0.5,
        max_tokens=1200,
    )
    return improved.strip()

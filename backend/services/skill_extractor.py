"""Skill extraction from CV and job-description text.

Combines:
1. Gemini extraction (comprehensive, handles phrasing and synonyms)
2. Vocabulary matching against a curated skill list, used when the LLM
   quota is exhausted
"""

import logging
import re

from services import gemini_client, prompt_builder
from services.gemini_client import LLMQuotaError, LLMResponseError

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Curated vocabulary, grouped the same way the detailed extraction reports it
# ---------------------------------------------------------------------------
SKILL_VOCABULARY: dict[str, frozenset[str]] = {
    "technical": frozenset({
        "python", "javascript", "typescript", "java", "c++", "c#",
        "golang", "rust", "ruby", "php", "swift", "kotlin", "scala",
        "sql", "bash", "shell", "powershell", "dart",
        "html", "html5", "css", "css3", "sass", "scss",
        "postgresql", "postgres", "mysql", "mongodb", "redis", "sqlite",
        "elasticsearch", "dynamodb", "firebase", "supabase",
        "aws", "azure", "gcp", "google cloud", "linux",
        "restful apis", "rest api", "graphql", "grpc", "websockets",
        "jwt", "oauth", "authentication", "session management",
        "ci/cd", "microservices", "serverless", "mvc architecture",
        "machine learning", "deep learning", "nlp", "computer vision",
        "data structures", "algorithms", "system design",
        "payment integration", "api testing", "unit testing",
    }),
    "frameworks": frozenset({
        "react", "react native", "next.js", "angular", "vue", "vue.js",
        "svelte", "tailwind", "tailwindcss", "bootstrap", "redux",
        "node.js", "express", "express.js", "nestjs", "fastapi", "django",
        "flask", "spring", "spring boot", "rails", ".net", "laravel",
        "flutter", "pandas", "numpy", "scikit-learn", "tensorflow",
        "pytorch", "keras", "langchain", "jest", "pytest", "cypress",
        "selenium", "playwright",
    }),
    "tools": frozenset({
        "git", "github", "gitlab", "docker", "kubernetes", "terraform",
        "jenkins", "github actions", "postman", "swagger", "jira",
        "figma", "canva", "visual studio code", "vs code", "vercel",
        "netlify", "render", "heroku", "stripe", "tableau", "power bi",
        "excel", "webpack", "vite", "nginx", "kafka", "rabbitmq",
    }),
    "soft": frozenset({
        "communication", "leadership", "teamwork", "problem solving",
        "problem-solving", "time management", "mentoring", "agile",
        "scrum", "ui/ux design", "project management",
    }),
}

ALL_SKILLS: frozenset[str] = frozenset().union(*SKILL_VOCABULARY.values())

SKILL_CATEGORIES = ("technical", "soft", "languages", "tools", "frameworks", "certifications")


def _normalize_skill(skill: str) -> str:
    """Normalize a skill string for comparison."""
    return re.sub(r"\s+", " ", skill.lower().strip().rstrip(".,:;"))


def split_skill_list(raw: str) -> list[str]:
    """Split a comma-separated LLM reply into skills.

    Drops blanks and case-insensitive repeats, keeping first spelling.
    """
    skills = []
    seen: set[str] = set()
    for part in raw.split(","):
        skill = part.strip().strip("*-•\"'").strip()
        key = _normalize_skill(skill)
        if key and key not in seen:
            seen.add(key)
            skills.append(skill)
    return skills


def extract_skills_pattern(text: str) -> set[str]:
    """Extract skills using vocabulary matching.

    Uses boundary matching to avoid substring false positives
    (e.g. "java" inside "javascript", "vue" inside "revue").
    """
    text_lower = text.lower()
    found: set[str] = set()

    for skill in ALL_SKILLS:
        escaped = re.escape(skill)
        if re.search(rf"(?<![a-zA-Z0-9.#]){escaped}(?![a-zA-Z0-9])", text_lower):
            found.add(skill)

    return found


def categorize_skills(skills: set[str]) -> dict[str, list[str]]:
    """Bucket vocabulary skills into the report categories."""
    categories: dict[str, list[str]] = {name: [] for name in SKILL_CATEGORIES}
    for name, vocab in SKILL_VOCABULARY.items():
        categories[name] = sorted(skills & vocab)
    return categories


async def extract_skills_llm(text: str) -> list[str]:
    prompt = prompt_builder.build_skills_prompt(text)
    raw, _ = await gemini_client.generate_text(prompt, temperature=0.3)
    return split_skill_list(raw)


async def extract_skills(text: str) -> tuple[list[str], str]:
    """Extract skills, preferring the LLM.

    Returns (skills, source) where source is "gemini" or "pattern".
    Quota errors fall back to vocabulary matching; if that finds nothing
    the quota error is re-raised.
    """
    try:
        skills = await extract_skills_llm(text)
        logger.info("Extracted %d skills with Gemini", len(skills))
        return skills, "gemini"
    except LLMQuotaError:
        logger.warning("Quota/rate limit hit, falling back to pattern skill extraction")
        skills = sorted(extract_skills_pattern(text))
        if not skills:
            raise
        return skills, "pattern"


async def extract_skills_detailed(text: str) -> dict:
    """Extract and categorize skills with the LLM.

    Returns a dict with skills, categories, experience_level, summary and
    source. Raises LLMResponseError if the reply lacks the expected
    structure.
    """
    prompt = prompt_builder.build_skill_categories_prompt(text)
    try:
        data, _ = await gemini_client.generate_json(
            prompt,
            system=prompt_builder.SKILL_ANALYST_SYSTEM,
            temperature=0.1,
            max_tokens=2000,
        )
    except LLMQuotaError:
        skills = extract_skills_pattern(text)
        if not skills:
            raise
        logger.warning("Quota/rate limit hit, categorizing %d vocabulary skills", len(skills))
        return {
            "skills": sorted(skills),
            "categories": categorize_skills(skills),
            "experience_level": "",
            "summary": "",
            "source": "pattern",
        }

    if not isinstance(data, dict) or not isinstance(data.get("skills"), list):
        raise LLMResponseError("Failed to parse skill extraction response", "Invalid skills array in response")
    raw_categories = data.get("categories")
    if not isinstance(raw_categories, dict):
        raise LLMResponseError("Failed to parse skill extraction response", "Invalid categories object in response")

    categories = {name: list(raw_categories.get(name) or []) for name in SKILL_CATEGORIES}
    return {
        "skills": [str(s) for s in data["skills"]],
        "categories": categories,
        "experience_level": data.get("experience_level") or "",
        "summary": data.get("summary") or "",
        "source": "gemini",
    }

"""Job recommendations from a bundled job catalog.

Jobs are ranked by fuzzy overlap between the words of the user's message
(usually a skill list or CV summary) and each job's listed skills.
"""

import json
import logging
import re
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path

from config import settings

logger = logging.getLogger(__name__)

BACKEND_DIR = Path(__file__).resolve().parent.parent

SIMILARITY_THRESHOLD = 0.4
TITLE_MATCH_BOOST = 0.4
# Shorter words ("a", "in") only match exactly; as substrings they hit everything
MIN_PARTIAL_MATCH_LENGTH = 3

_UIUX_RE = re.compile(r"ui/?ux(\s+)?(design(er)?)", re.IGNORECASE)


@dataclass
class JobMatch:
    title: str
    description: str
    matched_skills: list[str]
    similarity: float

    @property
    def reason(self) -> str:
        if self.matched_skills:
            return f"Matched skills: {', '.join(self.matched_skills)}"
        if self.title:
            return f"Title match: {self.title}"
        return "No specific skills matched."


def _resolve_path(path: str) -> Path:
    p = Path(path)
    return p if p.is_absolute() else BACKEND_DIR / p


@lru_cache(maxsize=4)
def load_jobs(path: str | None = None) -> list[dict]:
    """Load the job catalog JSON (a list of {title, description, skills})."""
    jobs_path = _resolve_path(path or settings.jobs_data_path)
    with open(jobs_path, encoding="utf-8") as f:
        jobs = json.load(f)
    logger.info("Loaded %d jobs from %s", len(jobs), jobs_path)
    return jobs


def normalize_term(term: str) -> str:
    """Lower-case, fold "UI/UX design(er)" to "uiux", drop whitespace."""
    return re.sub(r"\s+", "", _UIUX_RE.sub("uiux", term)).lower()


def fuzzy_includes(items: list[str], word: str) -> bool:
    norm_word = normalize_term(word)
    if not norm_word:
        return False
    for item in items:
        norm_item = normalize_term(item)
        if not norm_item:
            continue
        if len(norm_word) < MIN_PARTIAL_MATCH_LENGTH or len(norm_item) < MIN_PARTIAL_MATCH_LENGTH:
            if norm_word == norm_item:
                return True
        elif norm_word in norm_item or norm_item in norm_word:
            return True
    return False


def split_words(message: str) -> list[str]:
    """Lower-cased words of a message, with "UI/UX design(er)" kept as one "uiux" word."""
    message = _UIUX_RE.sub("uiux", message)
    return [w.strip().lower() for w in re.split(r"[\s,]+", message) if w.strip()]


def score_job(job: dict, words: list[str]) -> JobMatch:
    job_skills = [s.lower() for s in job.get("skills") or []]
    matched = [js for js in job_skills if any(fuzzy_includes([js], w) for w in words)]
    similarity = len(matched) / len(job_skills) if job_skills else 0.0

    title = (job.get("title") or "").lower()
    norm_title = normalize_term(title)
    uiux_match = "uiux" in norm_title and "uiux" in words
    title_words = [w for w in words if len(w) >= MIN_PARTIAL_MATCH_LENGTH]
    title_match = bool(title) and any(w in title or title in w for w in title_words)
    if title_match or uiux_match:
        similarity += TITLE_MATCH_BOOST

    return JobMatch(
        title=job.get("title") or "",
        description=job.get("description") or "",
        matched_skills=matched,
        similarity=similarity,
    )


def recommend_jobs(message: str, match_count: int = 4, jobs: list[dict] | None = None) -> list[JobMatch]:
    """Return up to match_count jobs scoring at least SIMILARITY_THRESHOLD."""
    if jobs is None:
        jobs = load_jobs()
    words = split_words(message)

    scored = [score_job(job, words) for job in jobs]
    kept = [m for m in scored if m.similarity >= SIMILARITY_THRESHOLD]
    kept.sort(key=lambda m: (m.similarity, len(m.matched_skills)), reverse=True)

    logger.debug(
        "Top jobs: %s",
        [(m.title, round(m.similarity, 3)) for m in kept[:5]],
    )
    return kept[:match_count]

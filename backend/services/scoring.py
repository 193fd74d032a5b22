"""CV / job-description match scoring.

Blends two signals into a single percentage:
1. Cosine similarity between the CV and JD embeddings
2. Jaccard overlap between the CV skills and the JD skills

All functions here are pure: same inputs produce the same outputs.
"""

import logging
from collections.abc import Sequence
from dataclasses import dataclass, field

from services.similarity import cosine_similarity

logger = logging.getLogger(__name__)

W_EMBEDDING = 0.5
W_SKILLS = 0.5

# Non-zero matches are never shown below this
MIN_NONZERO_SCORE = 0.05

HIGH_MATCH_THRESHOLD = 0.8
MEDIUM_MATCH_THRESHOLD = 0.5

# Below this embedding similarity an empty skill gap is not trusted
LOW_SIMILARITY_THRESHOLD = 0.6


@dataclass
class SkillOverlap:
    score: float = 0.0
    matched: list[str] = field(default_factory=list)
    missing: list[str] = field(default_factory=list)


@dataclass
class MatchResult:
    score: float
    match_level: str
    missing_skills: list[str]
    embedding_score: float = 0.0
    skill_score: float = 0.0


def _normalize(skills: Sequence[str]) -> list[str]:
    return [s.lower() for s in skills]


def compute_skill_overlap(
    cv_skills: Sequence[str], jd_skills: Sequence[str]
) -> SkillOverlap:
    """Jaccard overlap between candidate and job skills (case-insensitive).

    Missing skills keep the job list's order and casing; repeated entries
    that differ only by case are reported once.
    """
    cv_set = set(_normalize(cv_skills))
    jd_normalized = _normalize(jd_skills)

    matched = sorted({s for s in jd_normalized if s in cv_set})
    union = set(jd_normalized) | cv_set
    score = len(matched) / len(union) if union else 0.0

    missing: list[str] = []
    seen: set[str] = set()
    for skill in jd_skills:
        key = skill.lower()
        if key in cv_set or key in seen:
            continue
        seen.add(key)
        missing.append(skill)

    return SkillOverlap(score=score, matched=matched, missing=missing)


def fallback_missing_skills(
    cv_skills: Sequence[str],
    catalog: Sequence[str],
    limit: int = 6,
) -> list[str]:
    """Pick catalog skills the candidate does not already list."""
    cv_set = set(_normalize(cv_skills))
    return [s for s in catalog if s.lower() not in cv_set][:limit]


def combine_scores(embedding_score: float, skill_score: float) -> float:
    """Weighted blend of both signals, floored and clamped to [0, 1]."""
    combined = W_EMBEDDING * embedding_score + W_SKILLS * skill_score
    if 0 < combined < MIN_NONZERO_SCORE:
        combined = MIN_NONZERO_SCORE
    return min(1.0, max(0.0, combined))


def classify_match(combined: float) -> str:
    if combined >= HIGH_MATCH_THRESHOLD:
        return "high"
    if combined >= MEDIUM_MATCH_THRESHOLD:
        return "medium"
    return "low"


def score_match(
    cv_embedding: Sequence[float],
    jd_embedding: Sequence[float],
    cv_skills: Sequence[str] | None = None,
    jd_skills: Sequence[str] | None = None,
    fallback_catalog: Sequence[str] = (),
    fallback_limit: int = 6,
) -> MatchResult:
    """Score a CV against a job description.

    Skill overlap is only computed when both skill lists are given. If no
    job skill is missing but the embeddings are far apart, the missing list
    is filled from ``fallback_catalog`` so a weak match still shows
    something to work on.

    Raises VectorLengthError if the embeddings differ in length.
    """
    embedding_score = cosine_similarity(cv_embedding, jd_embedding)

    skill_score = 0.0
    missing: list[str] = []
    if cv_skills is not None and jd_skills is not None:
        overlap = compute_skill_overlap(cv_skills, jd_skills)
        skill_score = overlap.score
        missing = overlap.missing

        if not missing and embedding_score < LOW_SIMILARITY_THRESHOLD:
            missing = fallback_missing_skills(cv_skills, fallback_catalog, fallback_limit)
            logger.debug(
                "No skill gap at similarity %.3f, suggesting %d catalog skills",
                embedding_score, len(missing),
            )

    combined = combine_scores(embedding_score, skill_score)
    return MatchResult(
        score=round(combined * 100, 2),
        match_level=classify_match(combined),
        missing_skills=missing,
        embedding_score=embedding_score,
        skill_score=skill_score,
    )

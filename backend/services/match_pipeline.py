"""Orchestrator: CV-to-job match pipeline.

Pipeline:
1. CV text (already extracted from the upload)
2. Skill extraction for CV and JD (Gemini, vocabulary fallback)
3. Embeddings for CV and JD (Gemini, mock fallback)
4. Match scoring (embedding cosine + skill overlap)

Each stage reads and writes a MatchSession rather than shared state.
"""

import logging
from dataclasses import dataclass, field

from config import settings
from models.responses import AnalysisResponse
from services import embeddings, scoring, skill_extractor
from services.gemini_client import LLMError

logger = logging.getLogger(__name__)


@dataclass
class MatchSession:
    cv_text: str
    job_description: str
    cv_skills: list[str] = field(default_factory=list)
    jd_skills: list[str] = field(default_factory=list)
    skills_source: str = "gemini"
    cv_embedding: list[float] = field(default_factory=list)
    jd_embedding: list[float] = field(default_factory=list)
    embedding_source: str = "gemini"
    result: scoring.MatchResult | None = None
    degraded: bool = False


async def _skills_for(text: str) -> tuple[list[str], str]:
    try:
        return await skill_extractor.extract_skills(text)
    except LLMError as e:
        logger.warning("LLM skill extraction unavailable (%s), using vocabulary", e.message)
        return sorted(skill_extractor.extract_skills_pattern(text)), "pattern"


async def extract_skills_stage(session: MatchSession) -> None:
    session.cv_skills, cv_source = await _skills_for(session.cv_text)
    session.jd_skills, jd_source = await _skills_for(session.job_description)
    if "pattern" in (cv_source, jd_source):
        session.skills_source = "pattern"
        session.degraded = True


async def _embedding_for(text: str) -> embeddings.EmbeddingResult:
    try:
        return await embeddings.get_embedding(text)
    except LLMError as e:
        logger.warning("Embedding API unavailable (%s), using mock embedding", e.message)
        return embeddings.EmbeddingResult(vector=embeddings.mock_embedding(text), source="mock")


async def embed_stage(session: MatchSession) -> None:
    cv = await _embedding_for(session.cv_text)
    jd = await _embedding_for(session.job_description)
    session.cv_embedding = cv.vector
    session.jd_embedding = jd.vector
    if "mock" in (cv.source, jd.source):
        session.embedding_source = "mock"
        session.degraded = True


def score_stage(session: MatchSession) -> None:
    session.result = scoring.score_match(
        session.cv_embedding,
        session.jd_embedding,
        session.cv_skills,
        session.jd_skills,
        fallback_catalog=settings.commonly_missing_skills,
        fallback_limit=settings.missing_skills_fallback_limit,
    )


async def analyze(cv_text: str, job_description: str) -> AnalysisResponse:
    """Run the full match pipeline for one CV and one job description."""
    session = MatchSession(cv_text=cv_text, job_description=job_description)

    await extract_skills_stage(session)
    await embed_stage(session)
    score_stage(session)

    result = session.result
    logger.info(
        "Match analysis: score=%.2f level=%s degraded=%s",
        result.score, result.match_level, session.degraded,
    )
    return AnalysisResponse(
        score=result.score,
        match_level=result.match_level,
        missing_skills=result.missing_skills,
        embedding_score=round(result.embedding_score, 4),
        skill_score=round(result.skill_score, 4),
        cv_skills=session.cv_skills,
        jd_skills=session.jd_skills,
        skills_source=session.skills_source,
        embedding_source=session.embedding_source,
        degraded=session.degraded,
    )

"""Shared dependencies for API routes."""

from dataclasses import dataclass

from fastapi import HTTPException

from config import settings
from services.gemini_client import get_client


@dataclass(frozen=True)
class FallbackSkills:
    """Catalog shown for weak matches that have no concrete skill gap."""

    catalog: tuple[str, ...]
    limit: int


def get_fallback_skills() -> FallbackSkills:
    return FallbackSkills(
        catalog=tuple(settings.commonly_missing_skills),
        limit=settings.missing_skills_fallback_limit,
    )


def require_gemini_client():
    client = get_client()
    if client is None:
        raise HTTPException(
            status_code=500,
            detail="LLM API key not configured. Please set GEMINI_API_KEY in your .env file",
        )
    return client

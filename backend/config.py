import os
from pydantic_settings import BaseSettings


def _parse_cors_origins() -> list[str] | None:
    """Parse CORS_ORIGINS env var as comma-separated string or JSON list."""
    raw = os.environ.get("CORS_ORIGINS")
    if not raw:
        return None
    if raw.startswith("["):
        import json
        return json.loads(raw)
    return [o.strip() for o in raw.split(",") if o.strip()]


# Shown when a low-similarity match has no concrete skill gap to report.
COMMONLY_MISSING_SKILLS = [
    "JWT", "Authentication", "RESTful APIs", "API Testing",
    "Postman", "Figma", "Canva", "Visual Studio Code",
    "Vercel", "Render", "Stripe", "MVC Architecture",
    "Session Management", "Payment Integration", "UI/UX Design",
]


class Settings(BaseSettings):
    gemini_api_key: str = ""
    gemini_model: str = "gemini-2.5-flash"
    gemini_fallback_model: str = "gemini-2.5-flash-lite"
    gemini_embedding_model: str = "gemini-embedding-001"
    embedding_dimensions: int = 1536
    llm_timeout_seconds: float = 80.0

    max_upload_size_mb: int = 10
    cors_origins: list[str] = [
        "http://localhost:5173",
        "http://localhost:3000",
    ]
    debug: bool = False
    log_level: str = "INFO"
    rate_limit: str = "30/minute"

    # Serve deterministic fake vectors when the embedding API is unavailable
    mock_embeddings_enabled: bool = True
    jobs_data_path: str = "data/jobs.json"

    commonly_missing_skills: list[str] = COMMONLY_MISSING_SKILLS
    missing_skills_fallback_limit: int = 6

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}


_cors_override = _parse_cors_origins()
settings = Settings(**{"cors_origins": _cors_override} if _cors_override else {})

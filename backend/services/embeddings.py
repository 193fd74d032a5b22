"""Text embeddings for CVs and job descriptions."""

import logging
import math
import re
from dataclasses import dataclass

import numpy as np

from config import settings
from services import gemini_client
from services.gemini_client import LLMError, LLMNotConfiguredError

logger = logging.getLogger(__name__)

MAX_EMBED_CHARS = 8000

_DISALLOWED_CHARS_RE = re.compile(r"[^\w\s\-.,()]")


class EmptyTextError(ValueError):
    pass


@dataclass
class EmbeddingResult:
    vector: list[float]
    source: str = "gemini"
    message: str | None = None

    @property
    def dimensions(self) -> int:
        return len(self.vector)


def clean_text_for_embedding(text: str) -> str:
    """Flatten text to a single line of words and basic punctuation."""
    text = re.sub(r"[\r\n]+", " ", text)
    text = _DISALLOWED_CHARS_RE.sub(" ", text)
    return re.sub(r"\s+", " ", text).strip()


def prepare_text(text: str) -> str:
    if not text or not text.strip():
        raise EmptyTextError("Text cannot be empty for embedding generation")
    cleaned = clean_text_for_embedding(text)
    if not cleaned:
        raise EmptyTextError("Text becomes empty after cleaning - please provide meaningful text")
    if len(cleaned) > MAX_EMBED_CHARS:
        cleaned = cleaned[:MAX_EMBED_CHARS] + "..."
    return cleaned


def mock_embedding(text: str, dimensions: int | None = None) -> list[float]:
    """Deterministic unit-length pseudo-embedding seeded by the text.

    Only for development when the embedding API is unavailable; it carries
    no semantic signal.
    """
    dimensions = dimensions or settings.embedding_dimensions
    seed = sum(ord(c) for c in text)

    values = np.empty(dimensions)
    for i in range(dimensions):
        x = math.sin(seed + i) * 10000
        values[i] = round((x - math.floor(x) - 0.5) * 2, 6)

    norm = np.linalg.norm(values)
    if norm == 0:
        return values.tolist()
    return (values / norm).tolist()


async def get_embedding(text: str) -> EmbeddingResult:
    """Embed text via Gemini, falling back to a mock vector if allowed.

    Raises EmptyTextError for blank input, and LLMError when the provider
    fails and mock embeddings are disabled.
    """
    cleaned = prepare_text(text)
    try:
        vector = await gemini_client.embed_text(cleaned)
    except LLMNotConfiguredError:
        raise
    except LLMError as e:
        if not settings.mock_embeddings_enabled:
            raise
        logger.warning("Embedding generation failed, using mock embedding: %s", e.details or e.message)
        return EmbeddingResult(
            vector=mock_embedding(text),
            source="mock",
            message="Embedding API unavailable - using mock embedding for development",
        )

    if len(vector) != settings.embedding_dimensions:
        logger.warning(
            "Expected %d dimensions, got %d", settings.embedding_dimensions, len(vector)
        )
    return EmbeddingResult(vector=vector)

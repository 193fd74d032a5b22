from unittest.mock import AsyncMock, patch

import numpy as np
import pytest

from config import settings
from services import embeddings
from services.embeddings import (
    MAX_EMBED_CHARS,
    EmptyTextError,
    clean_text_for_embedding,
    mock_embedding,
    prepare_text,
)
from services.gemini_client import LLMNotConfiguredError, LLMQuotaError


def test_clean_text_flattens_and_strips_symbols():
    text = "Senior Engineer\n\nSkills: Python & Go!  (5 yrs)\r\n"
    assert clean_text_for_embedding(text) == "Senior Engineer Skills Python Go (5 yrs)"


def test_prepare_text_rejects_blank():
    with pytest.raises(EmptyTextError):
        prepare_text("   ")


def test_prepare_text_rejects_symbols_only():
    with pytest.raises(EmptyTextError):
        prepare_text("@@@ ### !!!")


def test_prepare_text_truncates_long_text():
    prepared = prepare_text("word " * 5000)
    assert len(prepared) == MAX_EMBED_CHARS + 3
    assert prepared.endswith("...")


def test_mock_embedding_is_unit_length_and_sized():
    vector = mock_embedding("Python developer")
    assert len(vector) == settings.embedding_dimensions
    assert np.linalg.norm(vector) == pytest.approx(1.0)


def test_mock_embedding_is_deterministic():
    assert mock_embedding("same text", 32) == mock_embedding("same text", 32)
    assert mock_embedding("same text", 32) != mock_embedding("other text", 32)


@pytest.mark.asyncio
async def test_get_embedding_uses_provider_vector():
    vector = [0.1] * settings.embedding_dimensions
    with patch("services.gemini_client.embed_text", AsyncMock(return_value=vector)) as embed:
        result = await embeddings.get_embedding("Python developer\nwith Docker")

    embed.assert_awaited_once_with("Python developer with Docker")
    assert result.source == "gemini"
    assert result.dimensions == settings.embedding_dimensions


@pytest.mark.asyncio
async def test_get_embedding_falls_back_to_mock_on_quota():
    with patch("services.gemini_client.embed_text", AsyncMock(side_effect=LLMQuotaError("LLM quota exceeded"))):
        result = await embeddings.get_embedding("Python developer")

    assert result.source == "mock"
    assert result.message
    assert result.vector == mock_embedding("Python developer")


@pytest.mark.asyncio
async def test_get_embedding_raises_when_mock_disabled(monkeypatch):
    monkeypatch.setattr(settings, "mock_embeddings_enabled", False)
    with patch("services.gemini_client.embed_text", AsyncMock(side_effect=LLMQuotaError("LLM quota exceeded"))):
        with pytest.raises(LLMQuotaError):
            await embeddings.get_embedding("Python developer")


@pytest.mark.asyncio
async def test_get_embedding_not_configured_is_not_mocked():
    with pytest.raises(LLMNotConfiguredError):
        await embeddings.get_embedding("Python developer")

"""Google Gemini API wrapper with error handling."""

import asyncio
import json
import logging
import re
from typing import Any

import httpx
from google import genai
from google.genai import errors, types

from config import settings

logger = logging.getLogger(__name__)

_client: genai.Client | None = None

_JSON_OBJECT_RE = re.compile(r"\{[\s\S]*\}")


class LLMError(Exception):
    """Base error for LLM provider failures."""

    status_code = 500

    def __init__(self, message: str, details: str | None = None):
        super().__init__(message)
        self.message = message
        self.details = details


class LLMNotConfiguredError(LLMError):
    pass


class LLMQuotaError(LLMError):
    status_code = 429


class LLMTimeoutError(LLMError):
    status_code = 504


class LLMResponseError(LLMError):
    """Provider answered, but not in the shape we asked for."""

    status_code = 502


def get_client() -> genai.Client | None:
    global _client
    if not settings.gemini_api_key:
        logger.warning("No GEMINI_API_KEY set - Gemini features disabled")
        return None
    if _client is None:
        _client = genai.Client(api_key=settings.gemini_api_key)
    return _client


def _require_client() -> genai.Client:
    client = get_client()
    if client is None:
        raise LLMNotConfiguredError(
            "LLM API key not configured",
            "Please set GEMINI_API_KEY in your .env file",
        )
    return client


def _translate_api_error(e: errors.APIError) -> LLMError:
    if e.code == 429 or "quota" in str(e).lower():
        return LLMQuotaError("LLM quota exceeded", str(e))
    err = LLMError("LLM API error", str(e))
    if e.code and 400 <= e.code < 600:
        err.status_code = e.code
    return err


def strip_code_fences(text: str) -> str:
    """Remove a surrounding markdown code fence (```json ... ```)."""
    text = text.strip()
    if text.startswith("```"):
        text = text.split("\n", 1)[1] if "\n" in text else text[3:]
        if text.endswith("```"):
            text = text[:-3]
        text = text.strip()
    return text


def parse_json_response(text: str) -> Any:
    """Parse JSON from an LLM reply.

    Tries the fence-stripped text first, then the outermost {...} block.
    Raises LLMResponseError if neither parses.
    """
    cleaned = strip_code_fences(text)
    try:
        return json.loads(cleaned)
    except json.JSONDecodeError as e:
        logger.debug("Direct JSON parse failed: %s", e)

    match = _JSON_OBJECT_RE.search(cleaned)
    if match:
        try:
            return json.loads(match.group(0))
        except json.JSONDecodeError as e:
            logger.debug("Regex JSON parse failed: %s", e)

    logger.error("Failed to parse Gemini response as JSON: %.200s", text)
    raise LLMResponseError("Failed to parse AI response", text[:500])


async def _generate(
    client: genai.Client,
    model: str,
    prompt: str,
    system: str | None,
    temperature: float,
    max_tokens: int,
    json_mode: bool,
) -> str:
    config = types.GenerateContentConfig(
        temperature=temperature,
        max_output_tokens=max_tokens,
        system_instruction=system,
        response_mime_type="application/json" if json_mode else None,
    )
    try:
        response = await asyncio.wait_for(
            client.aio.models.generate_content(model=model, contents=prompt, config=config),
            timeout=settings.llm_timeout_seconds,
        )
    except (asyncio.TimeoutError, httpx.TimeoutException):
        raise LLMTimeoutError("LLM request timed out")
    except errors.APIError as e:
        raise _translate_api_error(e)
    except httpx.HTTPError as e:
        raise LLMError("LLM API error", str(e) or type(e).__name__)
    return (response.text or "").strip()


async def generate_text(
    prompt: str,
    system: str | None = None,
    temperature: float = 0.3,
    max_tokens: int = 4096,
    json_mode: bool = False,
    allow_fallback: bool = False,
) -> tuple[str, str]:
    """Send a prompt to Gemini and return (text, model_used).

    With allow_fallback, a failure on the primary model (other than a
    timeout) is retried once on the fallback model.
    """
    client = _require_client()
    models = [settings.gemini_model]
    if allow_fallback:
        models.append(settings.gemini_fallback_model)
    models = [m for m in models if m]

    last_error: LLMError | None = None
    for model in models:
        try:
            text = await _generate(client, model, prompt, system, temperature, max_tokens, json_mode)
            return text, model
        except LLMTimeoutError:
            logger.error("Gemini request timed out on %s", model)
            raise
        except LLMError as e:
            logger.warning("Gemini call failed on %s: %s", model, e.details or e.message)
            last_error = e

    raise last_error or LLMError("LLM API error", "No Gemini model configured")


async def generate_json(
    prompt: str,
    system: str | None = None,
    temperature: float = 0.3,
    max_tokens: int = 4096,
    allow_fallback: bool = False,
) -> tuple[Any, str]:
    """Send a prompt to Gemini and parse the JSON response.

    Returns (parsed, model_used).
    """
    text, model = await generate_text(
        prompt,
        system=system,
        temperature=temperature,
        max_tokens=max_tokens,
        json_mode=True,
        allow_fallback=allow_fallback,
    )
    if not text:
        raise LLMResponseError("No response from AI")
    return parse_json_response(text), model


async def embed_text(text: str) -> list[float]:
    """Embed text with the configured Gemini embedding model."""
    client = _require_client()
    try:
        result = await asyncio.wait_for(
            client.aio.models.embed_content(
                model=settings.gemini_embedding_model,
                contents=text,
                config=types.EmbedContentConfig(
                    output_dimensionality=settings.embedding_dimensions,
                ),
            ),
            timeout=settings.llm_timeout_seconds,
        )
    except (asyncio.TimeoutError, httpx.TimeoutException):
        raise LLMTimeoutError("Embedding request timed out")
    except errors.APIError as e:
        raise _translate_api_error(e)
    except httpx.HTTPError as e:
        raise LLMError("Embedding API error", str(e) or type(e).__name__)

    if not result.embeddings or result.embeddings[0].values is None:
        raise LLMResponseError("Invalid embedding response format")
    return list(result.embeddings[0].values)

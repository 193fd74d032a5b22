from unittest.mock import AsyncMock, patch

import pytest

from services.cv_assistant import extract_cv_info, improve_cv, is_upgrade_request, parse_summary_fallback

CV_TEXT = "Jane Doe. Backend developer, 3 years of Python, Django and Docker."


def test_is_upgrade_request():
    assert is_upgrade_request("Please improve my CV")
    assert is_upgrade_request("any SUGGESTIONS?")
    assert not is_upgrade_request(CV_TEXT)


def test_parse_summary_fallback():
    summary, skills = parse_summary_fallback("Summary: Backend dev with 3 years.\nSkills: Python, Docker")
    assert summary == "Backend dev with 3 years."
    assert skills == ["Python", "Docker"]


def test_parse_summary_fallback_no_markers():
    assert parse_summary_fallback("nothing useful") == ("", [])


@pytest.mark.asyncio
async def test_extract_cv_info_summary_json():
    content = '{"summary": "Backend developer.", "skills": ["Python", "Docker"]}'
    generate = AsyncMock(return_value=(content, "m"))
    with patch("services.gemini_client.generate_text", generate):
        info = await extract_cv_info(CV_TEXT)

    assert info == {"summary": "Backend developer.", "skills": ["Python", "Docker"]}
    assert generate.await_args.kwargs["max_tokens"] == 300


@pytest.mark.asyncio
async def test_extract_cv_info_summary_text_fallback():
    content = "Summary: Solid backend profile. Skills: Python, Django"
    with patch("services.gemini_client.generate_text", AsyncMock(return_value=(content, "m"))):
        info = await extract_cv_info(CV_TEXT)

    assert info["summary"] == "Solid backend profile."
    assert info["skills"] == ["Python", "Django"]


@pytest.mark.asyncio
async def test_extract_cv_info_upgrade_request():
    content = '{"upgrade": "Quantify your impact."}'
    generate = AsyncMock(return_value=(content, "m"))
    with patch("services.gemini_client.generate_text", generate):
        info = await extract_cv_info("Please suggest upgrades. " + CV_TEXT)

    assert info == {"upgrade": "Quantify your impact."}
    assert "suggest 2-3 specific ways to improve" in generate.await_args.args[0]


@pytest.mark.asyncio
async def test_extract_cv_info_upgrade_plain_text():
    with patch("services.gemini_client.generate_text", AsyncMock(return_value=("Add metrics.", "m"))):
        info = await extract_cv_info("improve this: " + CV_TEXT)
    assert info == {"upgrade": "Add metrics."}


@pytest.mark.asyncio
async def test_improve_cv_strips_reply():
    with patch("services.gemini_client.generate_text", AsyncMock(return_value=("\n  Improved CV  \n", "m"))):
        assert await improve_cv(CV_TEXT) == "Improved CV"

from unittest.mock import AsyncMock, patch

import pytest

from services.gemini_client import LLMResponseError
from services.upskill import generate_roadmap, parse_roadmap

PLAIN_ROADMAP = """Docker
1. Learning Goal: Package applications into containers and run multi-service setups with Compose.
2. Time Required: 2 weeks (10-12 hours)
3. Best Free/Online Resources: "Docker for Beginners" on freeCodeCamp, Docker official docs
4. Projects: Containerize a Flask API with a Postgres database.

JWT
1. Learning Goal: Understand token-based authentication.
2. Time Required: 3 days
3. Best Free/Online Resources: jwt.io introduction
4. Projects: Add JWT login to an Express app.

Note: Time estimates may vary.
"""

MARKDOWN_ROADMAP = """### 1. **Kubernetes**
- **Learning Goal:** Deploy and scale containers on a cluster.
- **Time Required:** 3 weeks
- **Best Free/Online Resources:**
  - Kubernetes Basics tutorial
  - "Kubernetes for Absolute Beginners" on YouTube
- **Projects:** Deploy a three-tier app to minikube.
"""


def test_parse_roadmap_plain_format():
    steps = parse_roadmap(PLAIN_ROADMAP)
    assert [s.skill for s in steps] == ["Docker", "JWT"]

    docker = steps[0]
    assert docker.goal.startswith("Package applications")
    assert docker.time == "2 weeks (10-12 hours)"
    assert docker.resources == ['"Docker for Beginners" on freeCodeCamp', "Docker official docs"]
    assert docker.project == "Containerize a Flask API with a Postgres database."


def test_parse_roadmap_markdown_format():
    steps = parse_roadmap(MARKDOWN_ROADMAP)
    assert len(steps) == 1
    step = steps[0]
    assert step.skill == "Kubernetes"
    assert step.goal == "Deploy and scale containers on a cluster."
    assert step.time == "3 weeks"
    assert step.resources == ["Kubernetes Basics tutorial", '"Kubernetes for Absolute Beginners" on YouTube']
    assert step.project == "Deploy a three-tier app to minikube."


def test_parse_roadmap_drops_empty_and_duplicate_steps():
    text = "Figma\n\nFigma\n1. Learning Goal: Prototype screens.\nfigma\n1. Learning Goal: Again."
    steps = parse_roadmap(text)
    assert len(steps) == 1
    assert steps[0].goal == "Prototype screens."


def test_parse_roadmap_empty():
    assert parse_roadmap("") == []


@pytest.mark.asyncio
async def test_generate_roadmap_defaults_role():
    generate = AsyncMock(return_value=(PLAIN_ROADMAP, "m"))
    with patch("services.gemini_client.generate_text", generate):
        raw, steps = await generate_roadmap(["Docker", "JWT"], role="  ")

    prompt = generate.await_args.args[0]
    assert "I'm a computer science undergraduate." in prompt
    assert "Skills: Docker, JWT" in prompt
    assert raw == PLAIN_ROADMAP
    assert len(steps) == 2


@pytest.mark.asyncio
async def test_generate_roadmap_empty_reply():
    with patch("services.gemini_client.generate_text", AsyncMock(return_value=("", "m"))):
        with pytest.raises(LLMResponseError):
            await generate_roadmap(["Docker"])

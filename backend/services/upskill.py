"""Learning roadmaps for missing skills."""

import logging
import re
from dataclasses import dataclass, field

from services import gemini_client, prompt_builder
from services.gemini_client import LLMResponseError

logger = logging.getLogger(__name__)

_FIELD_RE = re.compile(
    r"^(?:\d+[.)]\s*)?[-*•]?\s*\**\s*"
    r"(learning goal|time required|best free/online resources|resources|projects?)"
    r"\s*\**\s*:\s*\**\s*(.*)$",
    re.IGNORECASE,
)
_BULLET_RE = re.compile(r"^[-*•]\s+(.*)$")
# Commas outside double quotes
_RESOURCE_SPLIT_RE = re.compile(r',\s*(?=(?:[^"]*"[^"]*")*[^"]*$)')
_MARKUP_RE = re.compile(r"[*#`_\[\]]+")
_NOTE_RE = re.compile(r"^note:", re.IGNORECASE)


@dataclass
class RoadmapStep:
    skill: str
    goal: str = ""
    time: str = ""
    resources: list[str] = field(default_factory=list)
    project: str = ""

    def is_empty(self) -> bool:
        return not (self.goal or self.time or self.resources or self.project)


def _field_key(label: str) -> str:
    label = label.lower()
    if label.startswith("learning"):
        return "goal"
    if label.startswith("time"):
        return "time"
    if label.startswith("project"):
        return "project"
    return "resources"


def _split_resources(value: str) -> list[str]:
    return [r.strip() for r in _RESOURCE_SPLIT_RE.split(value) if r.strip()]


def parse_roadmap(text: str) -> list[RoadmapStep]:
    """Parse roadmap text into one step per skill.

    A line that is not a field line starts a new skill. Steps with no
    filled field, and repeats of an earlier skill, are dropped.
    """
    steps: list[RoadmapStep] = []
    current: RoadmapStep | None = None
    current_key: str | None = None

    def flush() -> None:
        if current and current.skill and not current.is_empty():
            if not any(s.skill.lower() == current.skill.lower() for s in steps):
                steps.append(current)

    for raw_line in text.splitlines():
        line = raw_line.strip()
        if not line or _NOTE_RE.match(line):
            continue

        m = _FIELD_RE.match(line)
        if m and current is not None:
            current_key = _field_key(m.group(1))
            value = m.group(2).strip().rstrip("*").strip()
            if current_key == "resources":
                current.resources.extend(_split_resources(value))
            elif value:
                setattr(current, current_key, value)
            continue

        bullet = _BULLET_RE.match(line)
        if bullet and current is not None and current_key is not None:
            item = bullet.group(1).strip()
            if current_key == "resources":
                current.resources.append(item)
            else:
                existing = getattr(current, current_key)
                setattr(current, current_key, f"{existing} {item}".strip())
            continue

        flush()
        skill = _MARKUP_RE.sub("", line).strip()
        skill = re.sub(r"^\d+[.)]\s*", "", skill).strip().rstrip(":").strip()
        current = RoadmapStep(skill=skill)
        current_key = None

    flush()
    return steps


async def generate_roadmap(missing_skills: list[str], role: str | None = None) -> tuple[str, list[RoadmapStep]]:
    """Ask the LLM for a roadmap. Returns (raw_text, parsed_steps)."""
    role = role.strip() if role and role.strip() else prompt_builder.DEFAULT_ROLE
    prompt = prompt_builder.build_upskill_prompt(missing_skills, role)
    content, _ = await gemini_client.generate_text(prompt, temperature=0.5, max_tokens=2000)
    if not content:
        raise LLMResponseError("Failed to generate roadmap")

    steps = parse_roadmap(content)
    logger.info("Roadmap for %d skills parsed into %d steps", len(missing_skills), len(steps))
    return content, steps

"""Interview question generation and answer coaching."""

import logging

from services import gemini_client, prompt_builder
from services.gemini_client import LLMResponseError

logger = logging.getLogger(__name__)


async def generate_questions(job_title: str, job_description: str, resume_text: str) -> dict:
    """Generate tailored interview questions with ideal answers.

    Returns {"questions": [{"question", "idealAnswer"}], "model": ...}.
    Raises LLMResponseError if the reply is not the expected shape.
    """
    prompt = prompt_builder.build_interview_questions_prompt(job_title, job_description, resume_text)
    result, model = await gemini_client.generate_json(
        prompt,
        system=prompt_builder.INTERVIEW_QUESTIONS_SYSTEM,
        temperature=0.2,
        max_tokens=1200,
        allow_fallback=True,
    )

    questions = result.get("questions") if isinstance(result, dict) else None
    if not isinstance(questions, list):
        logger.error("Invalid model response: missing questions array")
        raise LLMResponseError("Invalid response from AI")
    for q in questions:
        if not isinstance(q, dict) or not isinstance(q.get("question"), str) or not isinstance(q.get("idealAnswer"), str):
            logger.error("Invalid question object format: %s", q)
            raise LLMResponseError("Invalid response from AI")

    logger.info("Interview coach output: model=%s questions=%d", model, len(questions))
    return {
        "questions": [{"question": q["question"], "idealAnswer": q["idealAnswer"]} for q in questions],
        "model": model,
    }


async def answer_feedback(question: str, user_answer: str) -> dict:
    """Score an answer to a generated question and suggest a stronger one."""
    prompt = prompt_builder.build_interview_feedback_prompt(question, user_answer)
    result, model = await gemini_client.generate_json(
        prompt,
        system=prompt_builder.INTERVIEW_FEEDBACK_SYSTEM,
        temperature=0.2,
        max_tokens=600,
        allow_fallback=True,
    )

    if (
        not isinstance(result, dict)
        or not isinstance(result.get("score"), (int, float))
        or isinstance(result.get("score"), bool)
        or not isinstance(result.get("feedback"), list)
        or not isinstance(result.get("revisedAnswer"), str)
    ):
        raise LLMResponseError("Invalid response from AI", str(result)[:500])

    return {
        "score": result["score"],
        "feedback": [str(tip) for tip in result["feedback"]],
        "revisedAnswer": result["revisedAnswer"],
        "model": model,
    }


async def evaluate_answer(answer: str, job_title: str, description: str | None = None) -> dict:
    """STAR-method evaluation of a practice answer."""
    prompt = prompt_builder.build_evaluate_answer_prompt(answer, job_title, description)
    content, _ = await gemini_client.generate_text(
        prompt,
        system=prompt_builder.INTERVIEW_COACH_SYSTEM,
        temperature=0.7,
        max_tokens=400,
    )
    parsed = gemini_client.parse_json_response(content)
    if not isinstance(parsed, dict):
        raise LLMResponseError("Failed to parse AI response.")

    score = parsed.get("score")
    try:
        score = float(score) if score is not None else None
    except (TypeError, ValueError):
        score = None
    feedback = parsed.get("feedback") or ""
    if isinstance(feedback, list):
        feedback = " ".join(str(f) for f in feedback)
    tags = parsed.get("tags")
    return {
        "score": score,
        "feedback": str(feedback),
        "improved": str(parsed["improved"]) if parsed.get("improved") else None,
        "tags": [str(t) for t in tags] if isinstance(tags, list) else None,
    }

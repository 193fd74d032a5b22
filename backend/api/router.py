import logging

from fastapi import APIRouter, Depends, File, Form, HTTPException, Request, UploadFile
from slowapi import Limiter
from slowapi.util import get_remote_address

from api.dependencies import FallbackSkills, get_fallback_skills, require_gemini_client
from config import settings
from models.requests import (
    CVTextRequest,
    EvaluateAnswerRequest,
    InterviewCoachRequest,
    InterviewFeedbackRequest,
    MatchScoreRequest,
    QuickAnalyzeRequest,
    RecommendJobsRequest,
    TextRequest,
    UpskillRequest,
)
from models.responses import (
    AnalysisResponse,
    AnswerEvaluationResponse,
    CVExtractionResponse,
    CVInfoResponse,
    CVMetadata,
    DetailedSkillsResponse,
    EmbeddingResponse,
    ImproveCVResponse,
    InterviewFeedbackResponse,
    InterviewQuestionsResponse,
    JobRecommendation,
    MatchScoreResponse,
    RecommendJobsResponse,
    RoadmapStepResponse,
    SkillsResponse,
    UpskillResponse,
)
from services import (
    cv_assistant,
    embeddings,
    interview_coach,
    job_recommender,
    match_pipeline,
    pdf_parser,
    scoring,
    skill_extractor,
    upskill,
)
from services.gemini_client import LLMError, LLMResponseError
from services.pdf_parser import PDFExtractionError

logger = logging.getLogger(__name__)

router = APIRouter()
limiter = Limiter(key_func=get_remote_address)

MIN_CV_TEXT_LENGTH = 20


def _llm_http_error(e: LLMError) -> HTTPException:
    logger.error("LLM call failed: %s (%s)", e.message, e.details)
    return HTTPException(status_code=e.status_code, detail=e.message)


def _max_upload_bytes() -> int:
    return settings.max_upload_size_mb * 1024 * 1024


def _require_cv_text(cv_text: str | None) -> str:
    if not cv_text or len(cv_text) < MIN_CV_TEXT_LENGTH:
        raise HTTPException(status_code=400, detail="Missing or invalid CV text.")
    return cv_text


@router.get("/health")
async def health():
    return {
        "status": "ok",
        "llm_configured": bool(settings.gemini_api_key),
    }


@router.post("/extract-cv", response_model=CVExtractionResponse)
async def extract_cv(file: UploadFile | None = File(None)):
    if file is None:
        raise HTTPException(status_code=400, detail="No file provided")

    content = await file.read()
    try:
        extraction = pdf_parser.extract_cv(
            content, file.filename, file.content_type, _max_upload_bytes()
        )
    except PDFExtractionError as e:
        raise HTTPException(status_code=e.status_code, detail=e.error)

    logger.info("Extracted %d chars from %s", extraction.sanitized_length, extraction.file_name)
    return CVExtractionResponse(
        text=extraction.text,
        metadata=CVMetadata(
            original_length=extraction.original_length,
            sanitized_length=extraction.sanitized_length,
            page_count=extraction.page_count,
            file_size=extraction.file_size,
            file_name=extraction.file_name,
        ),
    )


@router.post(
    "/extract-skills",
    response_model=SkillsResponse,
    response_model_exclude_none=True,
    dependencies=[Depends(require_gemini_client)],
)
@limiter.limit(settings.rate_limit)
async def extract_skills(request: Request, body: TextRequest):
    if not body.text:
        raise HTTPException(status_code=400, detail="No input text provided")

    try:
        skills, source = await skill_extractor.extract_skills(body.text)
    except LLMError as e:
        if e.status_code == 429:
            raise HTTPException(
                status_code=429,
                detail="Quota Exceeded. The LLM quota is exhausted and no skills were found locally.",
            )
        raise _llm_http_error(e)

    message = "Using pattern fallback (quota exceeded)" if source == "pattern" else None
    return SkillsResponse(skills=skills, source=source, message=message)


@router.post(
    "/extract-skills/detailed",
    response_model=DetailedSkillsResponse,
    dependencies=[Depends(require_gemini_client)],
)
@limiter.limit(settings.rate_limit)
async def extract_skills_detailed(request: Request, body: TextRequest):
    if not body.text or not body.text.strip():
        raise HTTPException(status_code=400, detail="No CV text provided")

    try:
        data = await skill_extractor.extract_skills_detailed(body.text)
    except LLMError as e:
        raise _llm_http_error(e)
    return DetailedSkillsResponse(**data)


@router.post(
    "/embeddings",
    response_model=EmbeddingResponse,
    response_model_exclude_none=True,
    dependencies=[Depends(require_gemini_client)],
)
@limiter.limit(settings.rate_limit)
async def create_embedding(request: Request, body: TextRequest):
    if body.text is None:
        raise HTTPException(status_code=400, detail="Invalid input text. Text must be a non-empty string")
    if not body.text.strip():
        raise HTTPException(status_code=400, detail="Empty text. Text cannot be empty after trimming")

    logger.info("Generating embedding for text of length: %d", len(body.text))
    try:
        result = await embeddings.get_embedding(body.text)
    except embeddings.EmptyTextError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except LLMError as e:
        logger.error("Embedding generation failed: %s", e.details or e.message)
        raise HTTPException(status_code=500, detail=f"Embedding generation failed: {e.message}")

    return EmbeddingResponse(
        embedding=result.vector,
        dimensions=result.dimensions,
        text_length=len(body.text),
        source=result.source,
        message=result.message,
    )


@router.post("/match-score", response_model=MatchScoreResponse)
async def match_score(
    body: MatchScoreRequest,
    fallback: FallbackSkills = Depends(get_fallback_skills),
):
    if not body.cv_embedding or not body.jd_embedding:
        raise HTTPException(status_code=400, detail="Missing embeddings")

    try:
        result = scoring.score_match(
            body.cv_embedding,
            body.jd_embedding,
            body.cv_skills,
            body.jd_skills,
            fallback_catalog=fallback.catalog,
            fallback_limit=fallback.limit,
        )
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    return MatchScoreResponse(
        score=result.score,
        match_level=result.match_level,
        missing_skills=result.missing_skills,
    )


@router.post("/extract-cv-info", response_model=CVInfoResponse, response_model_exclude_none=True)
@limiter.limit(settings.rate_limit)
async def extract_cv_info(request: Request, body: CVTextRequest):
    cv_text = _require_cv_text(body.cv_text)
    try:
        data = await cv_assistant.extract_cv_info(cv_text)
    except LLMError as e:
        raise _llm_http_error(e)
    return CVInfoResponse(**data)


@router.post("/improve-cv", response_model=ImproveCVResponse)
@limiter.limit(settings.rate_limit)
async def improve_cv(request: Request, body: CVTextRequest):
    cv_text = _require_cv_text(body.cv_text)
    try:
        improved = await cv_assistant.improve_cv(cv_text)
    except LLMError as e:
        raise _llm_http_error(e)
    return ImproveCVResponse(improved_cv=improved)


@router.post("/interview-coach", response_model=InterviewQuestionsResponse)
@limiter.limit(settings.rate_limit)
async def interview_coach_questions(request: Request, body: InterviewCoachRequest):
    if not body.job_title or not body.job_title.strip():
        raise HTTPException(status_code=400, detail="Job title is required")
    if not body.job_description or not body.job_description.strip():
        raise HTTPException(status_code=400, detail="Job Description is required")
    if not body.resume_text or not body.resume_text.strip():
        raise HTTPException(status_code=400, detail="Resume content is required")
    if len(body.resume_text.strip()) < MIN_CV_TEXT_LENGTH:
        raise HTTPException(status_code=400, detail="Resume content is too short")

    try:
        data = await interview_coach.generate_questions(
            body.job_title, body.job_description, body.resume_text
        )
    except LLMResponseError as e:
        raise _llm_http_error(e)
    except LLMError as e:
        if e.status_code == 504:
            raise _llm_http_error(e)
        logger.error("Interview coach failed: %s", e.details or e.message)
        raise HTTPException(status_code=500, detail="Something went wrong. Try again.")
    return InterviewQuestionsResponse(**data)


@router.post("/interview-feedback", response_model=InterviewFeedbackResponse)
@limiter.limit(settings.rate_limit)
async def interview_feedback(request: Request, body: InterviewFeedbackRequest):
    if not body.question or not body.question.strip():
        raise HTTPException(status_code=400, detail="Question is required")
    if not body.user_answer or not body.user_answer.strip():
        raise HTTPException(status_code=400, detail="User answer is required")

    try:
        data = await interview_coach.answer_feedback(body.question, body.user_answer)
    except LLMResponseError as e:
        raise _llm_http_error(e)
    except LLMError as e:
        if e.status_code == 504:
            raise _llm_http_error(e)
        logger.error("Interview feedback failed: %s", e.details or e.message)
        raise HTTPException(status_code=500, detail="Something went wrong. Try again.")
    return InterviewFeedbackResponse(**data)


@router.post("/evaluate-answer", response_model=AnswerEvaluationResponse, response_model_exclude_none=True)
@limiter.limit(settings.rate_limit)
async def evaluate_answer(request: Request, body: EvaluateAnswerRequest):
    if not body.answer or not body.job_title:
        raise HTTPException(status_code=400, detail="Missing required fields.")

    try:
        data = await interview_coach.evaluate_answer(body.answer, body.job_title, body.description)
    except LLMResponseError:
        raise HTTPException(status_code=500, detail="Failed to parse AI response.")
    except LLMError as e:
        raise _llm_http_error(e)
    return AnswerEvaluationResponse(**data)


@router.post(
    "/upskill",
    response_model=UpskillResponse,
    dependencies=[Depends(require_gemini_client)],
)
@limiter.limit(settings.rate_limit)
async def upskill_roadmap(request: Request, body: UpskillRequest):
    if body.missing_skills is None:
        raise HTTPException(status_code=400, detail="Missing or invalid skills list")

    try:
        roadmap, steps = await upskill.generate_roadmap(body.missing_skills, body.role)
    except LLMError as e:
        raise _llm_http_error(e)

    return UpskillResponse(
        roadmap=roadmap,
        steps=[
            RoadmapStepResponse(
                skill=s.skill, goal=s.goal, time=s.time, resources=s.resources, project=s.project
            )
            for s in steps
        ],
    )


@router.post("/recommend-jobs", response_model=RecommendJobsResponse)
async def recommend_jobs(body: RecommendJobsRequest):
    message = body.message or body.cv_text or ""
    try:
        matches = job_recommender.recommend_jobs(message, body.match_count)
    except (OSError, ValueError) as e:
        logger.error("Could not load job catalog: %s", e)
        raise HTTPException(status_code=500, detail="Internal server error")

    return RecommendJobsResponse(
        matches=[
            JobRecommendation(
                title=m.title,
                description=m.description,
                similarity=f"{m.similarity:.3f}",
                reason=m.reason,
            )
            for m in matches
        ]
    )


@router.post("/analyze", response_model=AnalysisResponse)
@limiter.limit(settings.rate_limit)
async def analyze(
    request: Request,
    resume_file: UploadFile = File(...),
    job_description: str = Form(...),
):
    if len(job_description) > 10000:
        raise HTTPException(status_code=400, detail="Job description too long (max 10000 chars)")
    if not job_description.strip():
        raise HTTPException(status_code=400, detail="Job description is required")

    content = await resume_file.read()
    try:
        extraction = pdf_parser.extract_cv(
            content, resume_file.filename, resume_file.content_type, _max_upload_bytes()
        )
    except PDFExtractionError as e:
        raise HTTPException(status_code=e.status_code, detail=e.error)

    return await _run_analysis(extraction.text, job_description)


@router.post("/analyze/quick", response_model=AnalysisResponse)
@limiter.limit(settings.rate_limit)
async def analyze_quick(request: Request, body: QuickAnalyzeRequest):
    return await _run_analysis(body.resume_text, body.job_description)


async def _run_analysis(cv_text: str, job_description: str) -> AnalysisResponse:
    try:
        return await match_pipeline.analyze(cv_text, job_description)
    except embeddings.EmptyTextError as e:
        raise HTTPException(status_code=400, detail=str(e))

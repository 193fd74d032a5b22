from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Accepts and emits camelCase keys; snake_case is accepted too."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class QuickAnalyzeRequest(CamelModel):
    resume_text: str = Field(..., min_length=1, max_length=50000, description="Plain text resume content")
    job_description: str = Field(..., min_length=1, max_length=10000, description="Job description text")


class TextRequest(CamelModel):
    text: str | None = Field(None, description="Text to extract skills from or embed")


class MatchScoreRequest(CamelModel):
    cv_embedding: list[float] | None = None
    jd_embedding: list[float] | None = None
    cv_skills: list[str] | None = None
    jd_skills: list[str] | None = None


class CVTextRequest(CamelModel):
    cv_text: str | None = None


class InterviewCoachRequest(CamelModel):
    job_title: str | None = None
    job_description: str | None = None
    resume_text: str | None = None


class InterviewFeedbackRequest(CamelModel):
    question: str | None = None
    user_answer: str | None = None


class EvaluateAnswerRequest(CamelModel):
    answer: str | None = None
    job_title: str | None = None
    description: str | None = None


class UpskillRequest(CamelModel):
    missing_skills: list[str] | None = None
    role: str | None = None


class RecommendJobsRequest(CamelModel):
    message: str | None = None
    cv_text: str | None = None
    match_count: int = Field(4, ge=1, le=50)

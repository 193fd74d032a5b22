from pydantic import Field

from models.requests import CamelModel


class CVMetadata(CamelModel):
    original_length: int = 0
    sanitized_length: int = 0
    page_count: int = 1
    file_size: int = 0
    file_name: str = ""


class CVExtractionResponse(CamelModel):
    text: str
    metadata: CVMetadata = CVMetadata()


class SkillsResponse(CamelModel):
    skills: list[str] = []
    source: str = "gemini"
    message: str | None = None


class SkillCategories(CamelModel):
    technical: list[str] = []
    soft: list[str] = []
    languages: list[str] = []
    tools: list[str] = []
    frameworks: list[str] = []
    certifications: list[str] = []


class DetailedSkillsResponse(CamelModel):
    skills: list[str] = []
    categories: SkillCategories = SkillCategories()
    experience_level: str = ""
    summary: str = ""
    source: str = "gemini"


class EmbeddingResponse(CamelModel):
    embedding: list[float]
    dimensions: int
    text_length: int
    source: str = "gemini"
    message: str | None = None


class MatchScoreResponse(CamelModel):
    score: float = 0.0
    match_level: str = "low"
    missing_skills: list[str] = []


class CVInfoResponse(CamelModel):
    summary: str | None = None
    skills: list[str] | None = None
    upgrade: str | None = None


class ImproveCVResponse(CamelModel):
    improved_cv: str = Field("", alias="improvedCV")


class InterviewQuestion(CamelModel):
    question: str
    ideal_answer: str


class InterviewQuestionsResponse(CamelModel):
    questions: list[InterviewQuestion] = []
    model: str = ""


class InterviewFeedbackResponse(CamelModel):
    score: float = 0
    feedback: list[str] = []
    revised_answer: str = ""
    model: str = ""


class AnswerEvaluationResponse(CamelModel):
    score: float | None = None
    feedback: str = ""
    improved: str | None = None
    tags: list[str] | None = None


class RoadmapStepResponse(CamelModel):
    skill: str
    goal: str = ""
    time: str = ""
    resources: list[str] = []
    project: str = ""


class UpskillResponse(CamelModel):
    roadmap: str
    steps: list[RoadmapStepResponse] = []


class JobRecommendation(CamelModel):
    title: str
    description: str = ""
    similarity: str = "0.000"
    reason: str = ""


class RecommendJobsResponse(CamelModel):
    matches: list[JobRecommendation] = []


class AnalysisResponse(MatchScoreResponse):
    embedding_score: float = 0.0
    skill_score: float = 0.0
    cv_skills: list[str] = []
    jd_skills: list[str] = []
    skills_source: str = "gemini"
    embedding_source: str = "gemini"
    degraded: bool = False

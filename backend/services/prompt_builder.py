"""All prompt templates for Gemini API calls."""

SKILL_ANALYST_SYSTEM = (
    "You are an expert HR analyst specializing in skill extraction from resumes. "
    "Always return valid JSON."
)
RECRUITER_SYSTEM = "You are an expert technical recruiter."
RESUME_WRITER_SYSTEM = "You are an expert technical recruiter and resume writer."
INTERVIEW_COACH_SYSTEM = "You are an expert interview coach."

DEFAULT_ROLE = "computer science undergraduate"


def build_skills_prompt(text: str) -> str:
    """Exhaustive skill list as a comma-separated reply."""
    return f"""Extract ALL technical skills, tools, platforms, concepts, and technologies mentioned in this text. Be extremely comprehensive and include:

- Programming languages (JavaScript, Python, etc.)
- Frameworks & libraries (React, Next.js, Express, Django, etc.)
- Databases (MongoDB, PostgreSQL, MySQL, etc.)
- Tools & platforms (Postman, Figma, Canva, Visual Studio Code, Vercel, Render, etc.)
- Authentication methods (JWT, session-based, etc.)
- Concepts & architectures (RESTful APIs, MVC, CI/CD, etc.)
- Cloud services (AWS, etc.)
- Payment systems (Stripe, etc.)
- Any other technology/skill mentioned

Text: "{text}"

Extract every single technical term and skill. Return as comma-separated list only:"""


def build_skill_categories_prompt(cv_text: str) -> str:
    return f"""Extract and categorize ALL skills mentioned in the following CV/resume text.

Respond with ONLY valid JSON (no markdown, no code fences) in this exact structure:
{{
  "skills": [<all unique skills found>],
  "categories": {{
    "technical": [<programming languages, databases, operating systems>],
    "soft": [<communication, leadership, problem-solving, etc.>],
    "languages": [<English, Spanish, etc.>],
    "tools": [<specific software tools, IDEs, applications>],
    "frameworks": [<React, Angular, Django, etc.>],
    "certifications": [<AWS Certified, PMP, etc.>]
  }},
  "experience_level": "<Junior | Mid-level | Senior | Expert>",
  "summary": "<2-3 sentence summary of the candidate's key strengths>"
}}

Rules:
1. Extract ALL skills mentioned, even if implied
2. Normalize skill names (e.g., "JS" -> "JavaScript", "React.js" -> "React")
3. Remove duplicates and variations of the same skill
4. Don't invent skills not mentioned in the text
5. Determine experience level from years of experience, job titles, and project complexity

CV Text:
---
{cv_text}
---"""


def build_cv_summary_prompt(cv_text: str) -> str:
    return f"""Read this CV and extract a short 2-line summary and a list of technical skills.

CV:
---
{cv_text}
---

Return JSON with fields: summary (string), skills (array of strings)."""


def build_cv_upgrade_prompt(cv_text: str) -> str:
    return f"""Read this CV and suggest 2-3 specific ways to improve it for tech jobs.

CV:
---
{cv_text}
---

Return JSON with a field: upgrade (string, 2-3 actionable suggestions)."""


def build_improve_cv_prompt(cv_text: str) -> str:
    return f"""Improve this CV to better match jobs in software engineering. Add metrics and active phrasing. Don't change job roles or fake skills.

CV:
---
{cv_text}
---"""


INTERVIEW_QUESTIONS_SYSTEM = (
    "You are an expert tech interview coach. Based on the job title, job description, "
    "and resume below, generate 5 tailored interview questions. Provide an ideal answer "
    "for each question. Return only valid JSON in the following format: "
    '{ "questions": [ { "question": "...", "idealAnswer": "..." } ] }'
)


def build_interview_questions_prompt(job_title: str, job_description: str, resume_text: str) -> str:
    return f"Job Title: {job_title}\nJob Description: {job_description}\nResume: {resume_text}"


INTERVIEW_FEEDBACK_SYSTEM = """You are an expert technical interviewer. A candidate answered an interview question.

Give a score from 1-10 (concise), list 2-3 improvement tips, and rewrite the answer to be stronger and more impactful.

Respond in this JSON format:
{
  "score": 8,
  "feedback": ["tip1", "tip2"],
  "revisedAnswer": "..."
}"""


def build_interview_feedback_prompt(question: str, answer: str) -> str:
    return f"Question: {question}\nAnswer: {answer}"


def build_evaluate_answer_prompt(answer: str, job_title: str, description: str | None) -> str:
    """STAR-method scoring of a practice answer."""
    return f"""You are an interview coach. Given the job title and candidate's answer, do the following:
1. Score the answer (1-10)
2. Explain what was good or lacking
3. Rewrite it using the STAR method

Job Title: {job_title}
Job Description: {description or "(none)"}
Candidate Answer: {answer}

Respond in JSON format as: {{ "score": <integer 1-10>, "feedback": "<string>", "improved": "<string>", "tags": [<short labels like "Too generic">] }}"""


def build_upskill_prompt(missing_skills: list[str], role: str) -> str:
    """Learning roadmap, one four-field block per skill."""
    return f"""I'm a {role}. For EACH of the following skills, generate a detailed learning roadmap step in this exact format:

Skill Name
1. Learning Goal: (fill with specific, practical, skill-relevant content)
2. Time Required: (fill with a realistic estimate)
3. Best Free/Online Resources: (list at least one high-quality, free online resource)
4. Projects: (suggest a practical project or exercise)

Example:
low-fidelity mockups
1. Learning Goal: Understand how to quickly visualize ideas and user flows using simple sketches or wireframes.
2. Time Required: 1 week (5-7 hours)
3. Best Free/Online Resources: "Wireframing for Beginners" on Coursera, "Low-Fidelity Prototyping" on Interaction Design Foundation.
4. Projects: Create wireframes for a simple mobile app, redesign a website homepage using paper sketches.

Skills: {", ".join(missing_skills)}

For every skill in the list, fill ALL four fields with specific, practical, and skill-relevant content. Do not skip any skill. Do not leave any field blank. Use a new block for each skill, and keep the format consistent as shown above."""

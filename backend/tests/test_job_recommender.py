from services.job_recommender import (
    fuzzy_includes,
    load_jobs,
    normalize_term,
    recommend_jobs,
    score_job,
    split_words,
)

JOBS = [
    {"title": "Backend Developer", "description": "APIs", "skills": ["Python", "Django", "PostgreSQL", "Docker"]},
    {"title": "Frontend Developer", "description": "UIs", "skills": ["JavaScript", "React", "CSS"]},
    {"title": "UI/UX Designer", "description": "Design", "skills": ["Figma", "Prototyping"]},
    {"title": "Accountant", "description": "Books", "skills": []},
]


def test_normalize_term_folds_uiux():
    assert normalize_term("UI/UX Designer") == "uiux"
    assert normalize_term("UX Design") == "uxdesign"
    assert normalize_term("Power BI") == "powerbi"


def test_split_words():
    assert split_words("Python, React  docker") == ["python", "react", "docker"]
    assert split_words("UI/UX Designer with Figma") == ["uiux", "with", "figma"]


def test_fuzzy_includes_partial_both_ways():
    assert fuzzy_includes(["postgresql"], "postgres")
    assert fuzzy_includes(["css"], "css3")
    assert not fuzzy_includes(["react"], "python")


def test_fuzzy_includes_short_words_need_exact_match():
    assert not fuzzy_includes(["javascript"], "a")
    assert fuzzy_includes(["go"], "go")


def test_score_job_ratio_of_matched_skills():
    match = score_job(JOBS[0], ["python", "docker"])
    assert match.matched_skills == ["python", "docker"]
    assert match.similarity == 0.5


def test_score_job_title_boost():
    match = score_job(JOBS[1], ["frontend", "react"])
    assert match.similarity == 1 / 3 + 0.4


def test_score_job_without_skills():
    match = score_job(JOBS[3], ["python"])
    assert match.similarity == 0.0


def test_recommend_jobs_filters_and_sorts():
    matches = recommend_jobs("Python, Django, Docker, React", match_count=4, jobs=JOBS)
    assert [m.title for m in matches] == ["Backend Developer"]
    assert matches[0].reason == "Matched skills: python, django, docker"


def test_recommend_jobs_limits_results():
    message = "python django postgresql docker javascript react css figma prototyping"
    matches = recommend_jobs(message, match_count=2, jobs=JOBS)
    assert len(matches) == 2


def test_recommend_jobs_title_only_reason():
    matches = recommend_jobs("accountant", jobs=JOBS)
    assert [m.title for m in matches] == ["Accountant"]
    assert matches[0].reason == "Title match: Accountant"


def test_recommend_jobs_uiux_boost():
    matches = recommend_jobs("UI/UX designer, Figma", jobs=JOBS)
    assert [m.title for m in matches] == ["UI/UX Designer"]
    assert matches[0].similarity == 0.5 + 0.4


def test_uiux_title_is_not_boosted_without_uiux_in_message():
    match = score_job(JOBS[2], ["python"])
    assert match.similarity == 0.0


def test_bundled_catalog_loads():
    jobs = load_jobs()
    assert len(jobs) > 0
    assert all("title" in j and "skills" in j for j in jobs)

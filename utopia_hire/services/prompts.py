"""
Prompt builders for the generative AI features.

Each builder takes plain dicts (rows from the database) and returns the
prompt text. Keep outputs short and strictly JSON where a JSON answer is
expected; the parsing side lives in ai_service.py.
"""

from typing import List, Optional


def _join(values: Optional[list], sep: str = ", ", default: str = "N/A", limit: Optional[int] = None) -> str:
    if not values:
        return default
    items = values[:limit] if limit else values
    return sep.join(str(v) for v in items)


def _truncate(text: Optional[str], length: int = 100) -> str:
    return (text or "")[:length]


# ============================================================
# MOCK INTERVIEW
# ============================================================

def interview_prompt(job: dict) -> str:
    return f"""You are an expert technical recruiter and interview designer. Generate a comprehensive, professional AI interview for the following job position.

**Job Details:**
- **Title:** {job.get("title")}
- **Company:** {job.get("company_name")}
- **Description:** {job.get("description")}
- **Required Skills:** {_join(job.get("required_skills"))}
- **Preferred Skills:** {_join(job.get("preferred_skills"))}
- **Experience Level:** {job.get("experience_level")}
- **Required Experience Years:** {job.get("required_experience_years") or "N/A"}
- **Responsibilities:** {_join(job.get("responsibilities"), sep="; ")}
- **Education Requirements:** {_join(job.get("education_requirements"))}

**Instructions:**
1. Create 18-25 questions organized into 4-6 logical sections
2. Mix behavioral (soft skills, problem-solving, teamwork) and technical questions
3. Questions should be relevant to the job requirements and experience level
4. Start with easier behavioral questions to build rapport
5. Progress to more technical/challenging questions
6. Each question should be clear, specific, and open-ended
7. Estimated duration: 60-90 minutes total

**Required JSON Output Format:**
```json
{{
  "job_title": "{job.get("title")}",
  "duration_minutes": 75,
  "sections": [
    {{
      "name": "Section Name (e.g., Introduction & Behavioral Questions)",
      "questions": [
        {{
          "id": 1,
          "type": "behavioral",
          "question": "Question text here"
        }}
      ]
    }}
  ]
}}
```

**Question Type Guidelines:**
- "behavioral": Past experiences, soft skills, work style, problem-solving approaches
- "technical": Domain knowledge, technical skills, tools, frameworks, best practices

Generate a high-quality, relevant interview NOW. Output ONLY the JSON, no additional text."""


def evaluation_prompt(job: dict, job_title: Optional[str], responses: List[dict]) -> str:
    answers = "\n".join(
        f"\nQ{r.get('question_id')} [{r.get('type')}]: {r.get('question')}\nA: {r.get('answer') or '(No answer)'}\n"
        for r in responses
    )
    return f"""You are an expert technical interviewer evaluating candidate responses for a {job_title or job.get("title")} position.

**Job Context:**
- Title: {job.get("title")}
- Experience Level: {job.get("experience_level")}
- Required Skills: {_join(job.get("required_skills"), limit=10)}

**Instructions:**
Evaluate each response and provide CONCISE feedback. Keep all text SHORT and FOCUSED.

**Responses to Evaluate:**
{answers}

**Output JSON (REQUIRED FORMAT - Be concise):**
[
  {{
    "question_id": 1,
    "ai_feedback": {{
      "evaluation_summary": "Brief 10-15 word summary",
      "detailed_feedback": "30-50 word analysis",
      "improvement_advice": ["Tip 1 (short)", "Tip 2 (short)"]
    }}
  }}
]

CRITICAL:
- Keep ALL text SHORT and CONCISE
- evaluation_summary: MAX 15 words
- detailed_feedback: MAX 50 words
- improvement_advice: 2-3 tips, each MAX 10 words
- Output ONLY valid JSON, nothing else
- Do NOT include improved_example_answer field"""


# ============================================================
# PROFILE FEEDBACK
# ============================================================

def profile_feedback_prompt(context: dict) -> str:
    profile = context.get("profile") or {}
    preferences = context.get("preferences") or {}

    def section(rows, fmt, empty):
        return "\n".join(fmt(r) for r in rows) if rows else empty

    experience = section(
        context.get("experiences"),
        lambda e: f"- {e.get('title')} at {e.get('company')} ({e.get('start_date')} to {e.get('end_date') or 'Present'})",
        "No experience added",
    )
    education = section(
        context.get("education"),
        lambda e: f"- {e.get('degree')} in {e.get('field_of_study')} from {e.get('school')} ({e.get('start_year')}-{e.get('end_year') or 'Present'})",
        "No education added",
    )
    skills = section(
        context.get("skills"),
        lambda s: f"- {s.get('name')} ({s.get('category') or 'general'})",
        "No skills added",
    )
    projects = section(
        context.get("projects"),
        lambda p: f"- {p.get('name')}: {p.get('description') or ''}",
        "No projects added",
    )
    certifications = section(
        context.get("certifications"),
        lambda c: f"- {c.get('name')} ({c.get('year')})",
        "No certifications added",
    )
    languages = section(
        context.get("languages"),
        lambda lang: f"- {lang.get('name')} ({lang.get('proficiency')})",
        "No languages added",
    )
    application_count = context.get("application_count") or 0
    applications = f"{application_count} applications submitted" if application_count else "No applications yet"

    return f"""
User Profile Analysis Request:

BASIC INFO:
- Name: {profile.get("full_name") or "Not provided"}
- Title: {profile.get("title") or "Not provided"}
- Location: {profile.get("location") or "Not provided"}

EXPERIENCE:
{experience}

EDUCATION:
{education}

SKILLS:
{skills}

PROJECTS:
{projects}

CERTIFICATIONS:
{certifications}

LANGUAGES:
{languages}

PREFERENCES:
- Work Environment: {preferences.get("work_environment") or "Not specified"}
- Company Size: {preferences.get("company_size") or "Not specified"}
- Career Goals: {preferences.get("career_goals") or "Not specified"}

JOB APPLICATIONS:
{applications}

Provide a SHORT, CONCISE profile analysis in this EXACT format:

## 🎯 Profile Score: [X]/5 ⭐
[One sentence explaining the score]

## 💪 Top Strengths
• [Strength 1 - one line]
• [Strength 2 - one line]
• [Strength 3 - one line]

## 🎯 Quick Wins
• [Actionable tip 1 - one line]
• [Actionable tip 2 - one line]
• [Actionable tip 3 - one line]

## 🚀 Next Steps
[2-3 sentences about career trajectory and what to focus on]

Keep it brief, encouraging, and actionable. Use emojis. Maximum 150 words total.
"""


# ============================================================
# CANDIDATE ANALYSIS
# ============================================================

def candidate_analysis_prompt(job: dict, candidate: dict) -> str:
    profile = candidate.get("profile") or {}
    experiences = candidate.get("experiences") or []
    education = candidate.get("education") or []
    skills = candidate.get("skills") or []
    projects = candidate.get("projects") or []
    certifications = candidate.get("certifications") or []

    experience_lines = "\n".join(
        f"- {e.get('title')} at {e.get('company')} ({e.get('start_date')} to {e.get('end_date') or 'Present'})"
        + (f"\n  {_truncate(e.get('description'))}" if e.get("description") else "")
        for e in experiences[:5]
    ) or "- No experience listed"
    education_lines = "\n".join(
        f"- {e.get('degree')} in {e.get('field_of_study')} from {e.get('school')} ({e.get('start_year')}-{e.get('end_year') or 'Present'})"
        for e in education
    ) or "- No education listed"
    project_lines = "\n".join(
        f"- {p.get('name')}" + (f": {_truncate(p.get('description'))}" if p.get("description") else "")
        for p in projects[:3]
    ) or "- No projects listed"
    certification_lines = "\n".join(
        f"- {c.get('name')}" + (f" ({c.get('year')})" if c.get("year") else "")
        for c in certifications
    ) or "- No certifications listed"

    return f"""
You are an expert recruiter analyzing a candidate for a specific job. Provide clear, actionable insights.

JOB REQUIREMENTS:
- Title: {job.get("title")}
- Company: {job.get("company_name")}
- Required Skills: {_join(job.get("required_skills"), default="Not specified")}
- Preferred Skills: {_join(job.get("preferred_skills"), default="Not specified")}
- Experience Level: {job.get("experience_level")}
- Location: {job.get("location")}

CANDIDATE PROFILE:
Name: {profile.get("full_name") or "Anonymous"}
Headline: {profile.get("headline") or "Not specified"}
Location: {profile.get("location") or "Not specified"}

EXPERIENCE ({len(experiences)} roles):
{experience_lines}

EDUCATION ({len(education)}):
{education_lines}

SKILLS ({len(skills)}):
{_join([s.get("name") for s in skills], default="No skills listed")}

PROJECTS ({len(projects)}):
{project_lines}

CERTIFICATIONS ({len(certifications)}):
{certification_lines}

Return ONLY valid JSON (no markdown):
{{
  "quickSummary": "Clear overview of the candidate in 20-25 words",
  "experienceMatch": "How their experience aligns with the role in 15-20 words",
  "skillsMatch": "Assessment of skills alignment in 15-20 words",
  "topStrength": "Their strongest quality or achievement in 10-15 words",
  "potentialConcern": "Any gap or concern to address in 10-15 words, or null if none",
  "interviewQuestions": ["Question 1", "Question 2"],
  "recommendation": "Brief hiring recommendation in 15-20 words"
}}

Be specific, objective, and helpful. Focus on fit for this particular role."""


def candidate_batch_prompt(job: dict, candidates: List[dict]) -> str:
    blocks = []
    for idx, candidate in enumerate(candidates, start=1):
        profile = candidate.get("profile") or {}
        experiences = candidate.get("experiences") or []
        education = candidate.get("education") or []
        skill_names = [s.get("name") for s in candidate.get("skills") or []]

        latest = f" - Latest: {experiences[0].get('title')} at {experiences[0].get('company')}" if experiences else ""
        edu = f"{education[0].get('degree')} in {education[0].get('field_of_study')}" if education else "N/A"
        more = f" +{len(skill_names) - 5} more" if len(skill_names) > 5 else ""
        blocks.append(
            f"\nCANDIDATE {idx}: {profile.get('full_name') or 'Anonymous'}\n"
            f"Headline: {profile.get('headline') or 'N/A'}\n"
            f"Experience: {len(experiences)} roles{latest}\n"
            f"Education: {edu}\n"
            f"Skills: {', '.join(skill_names[:5])}{more}\n"
        )

    return f"""
You are an expert recruiter. Provide SHORT, focused insights for each candidate. Be concise and actionable.

JOB REQUIREMENTS:
- Title: {job.get("title")}
- Required Skills: {_join(job.get("required_skills"), default="Not specified")}
- Experience Level: {job.get("experience_level")}

CANDIDATES ({len(candidates)}):
{"".join(blocks)}

Return ONLY valid JSON (no markdown):
{{
  "insights": [
    {{
      "candidateIndex": 1,
      "name": "Name",
      "quickSummary": "One clear sentence about the candidate (20-25 words)",
      "experienceMatch": "Brief assessment of experience relevance (15-20 words)",
      "skillsMatch": "How their skills align with role requirements (15-20 words)",
      "topStrength": "Their strongest quality or achievement (10-15 words)",
      "oneQuestion": "One insightful interview question to ask"
    }}
  ]
}}

Be informative and specific. Focus on job fit and key differentiators."""

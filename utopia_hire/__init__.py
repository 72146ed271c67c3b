"""
Utopia Hire
A job board and applicant tracking API with AI-assisted interviews.

Architecture:
- PostgreSQL: Structured data (users, profiles, organizations, jobs, applications)
- MongoDB: AI outputs (interviews, evaluations, analyses) and GridFS file buckets
- Gemini AI: Interview generation, answer evaluation, candidate analysis
- n8n: Resume generation, LaTeX compilation, summaries and job matching
"""

__version__ = "1.0.0"

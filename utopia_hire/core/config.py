"""
Configuration module - loads all env vars using pydantic-settings.
This is the SINGLE SOURCE OF TRUTH for all config values.
"""

from functools import lru_cache
from typing import List, Optional
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # PostgreSQL
    postgres_host: str = "localhost"
    postgres_port: int = 5432
    postgres_user: str = "utopia_user"
    postgres_password: str = "password"
    postgres_db: str = "utopia_hire"

    # Full URL override (e.g. sqlite:///./test.db for local runs)
    database_url: Optional[str] = None

    # MongoDB (AI outputs, knowledge documents, GridFS file buckets)
    mongodb_uri: str = "mongodb://localhost:27017"
    mongodb_db: str = "utopia_hire_docs"

    # Gemini (OpenAI-compatible endpoint)
    gemini_api_key: str = ""
    gemini_base_url: str = "https://generativelanguage.googleapis.com/v1beta/openai/"
    gemini_model: str = "gemini-2.5-flash"
    ai_max_retries: int = 3
    ai_retry_base_delay: float = 1.0

    # n8n workflow webhooks
    n8n_base_url: str = "https://n8n.benamara.tn"
    n8n_api_key: str = ""
    n8n_job_created_path: str = "/webhook/autopiahire/add-job"
    n8n_create_resume_path: str = "/webhook-test/autopiahire/create-resume"
    n8n_compile_latex_path: str = "/webhook-test/autopiahire/compile-latex"
    n8n_summarize_path: str = "/webhook-test/autopiahire/summarize"
    n8n_get_jobs_path: str = "/webhook-test/autopiahire/get-jobs"
    job_webhook_url: Optional[str] = None
    job_webhook_timeout: float = 2.0
    # Workflow calls (resume, LaTeX, summary, matching); unset means no limit
    webhook_timeout: Optional[float] = None

    # JWT Auth
    jwt_secret_key: str = "change-this-secret"
    jwt_algorithm: str = "HS256"
    jwt_expire_minutes: int = 1440
    session_cookie_name: str = "utopia_session"
    cookie_secure: bool = False

    # App
    debug: bool = False
    log_level: str = "INFO"
    public_base_url: str = "http://localhost:8000"
    cors_origins: List[str] = ["*"]

    @property
    def postgres_url(self) -> str:
        """Construct PostgreSQL connection URL"""
        return (
            f"postgresql://{self.postgres_user}:{self.postgres_password}"
            f"@{self.postgres_host}:{self.postgres_port}/{self.postgres_db}"
        )

    @property
    def sqlalchemy_url(self) -> str:
        return self.database_url or self.postgres_url

    def webhook_url(self, path: str) -> str:
        return f"{self.n8n_base_url.rstrip('/')}/{path.lstrip('/')}"

    # Pydantic v2 config
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )


@lru_cache()
def get_settings() -> Settings:
    return Settings()

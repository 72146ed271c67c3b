"""
n8n Webhook Client

The heavy resume/matching work runs in n8n workflows; this module only
calls them. Every request carries the `api_key` header n8n expects.

Webhooks:
- job created (best-effort notification, hard timeout)
- create resume (onboarding / "generate resume")
- compile LaTeX
- summarize profile
- get jobs (advanced matching)
"""

import logging
from typing import Any, Dict, Optional

import httpx

from utopia_hire.core.config import get_settings
from utopia_hire.core.errors import WebhookError

logger = logging.getLogger(__name__)

settings = get_settings()


class WebhookClient:

    def __init__(self, api_key: Optional[str] = None, timeout: Optional[float] = None):
        self.api_key = settings.n8n_api_key if api_key is None else api_key
        # None waits for the workflow to finish, however long it runs
        self.timeout = settings.webhook_timeout if timeout is None else timeout

    @property
    def is_configured(self) -> bool:
        return bool(self.api_key)

    def _headers(self) -> Dict[str, str]:
        return {"Content-Type": "application/json", "api_key": self.api_key or ""}

    def _request(self, method: str, url: str, **kwargs) -> Any:
        with httpx.Client(timeout=self.timeout) as client:
            response = client.request(method, url, headers=self._headers(), **kwargs)
        if response.status_code >= 400:
            logger.error("Webhook %s %s failed (%d): %s", method, url, response.status_code, response.text)
            raise WebhookError(response.status_code, response.text)
        return response.json()

    def notify_job_created(self, job_id: int) -> None:
        """Best-effort: never raises, failures are only logged."""
        url = settings.job_webhook_url or settings.webhook_url(settings.n8n_job_created_path)
        try:
            with httpx.Client(timeout=settings.job_webhook_timeout) as client:
                response = client.post(url, headers=self._headers(), json={"job_id": job_id})
            if response.status_code >= 400:
                logger.warning("Job webhook returned non-OK status %d: %s", response.status_code, response.text)
        except Exception as e:
            logger.warning("Error calling job webhook (non-fatal): %s", e)

    def create_resume(self, user_id: int) -> dict:
        url = settings.webhook_url(settings.n8n_create_resume_path)
        data = self._request("POST", url, json={"user_id": user_id})
        logger.info("Create-resume webhook succeeded for user %s", user_id)
        return data

    def compile_latex(self, user_id: int, latex_code: str) -> dict:
        logger.info("Sending LaTeX (%d chars) for compilation, user %s", len(latex_code), user_id)
        url = settings.webhook_url(settings.n8n_compile_latex_path)
        return self._request("POST", url, json={"user_id": user_id, "latex_code": latex_code})

    def summarize(self, user_id: int) -> Any:
        url = settings.webhook_url(settings.n8n_summarize_path)
        return self._request("GET", url, params={"user_id": user_id})

    def match_jobs(self, params: Dict[str, Any]) -> Any:
        url = settings.webhook_url(settings.n8n_get_jobs_path)
        return self._request("GET", url, params=params)


# Singleton instance
_webhook_client: WebhookClient = None


def get_webhook_client() -> WebhookClient:
    """Get or create the webhook client (singleton pattern)"""
    global _webhook_client
    if _webhook_client is None:
        _webhook_client = WebhookClient()
    return _webhook_client

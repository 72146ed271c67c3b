"""
AI Service - interview generation/evaluation, profile feedback and
candidate analysis on top of the Gemini client.

Failure policy:
- interview generation: retried, then AIServiceError
- interview evaluation: retried; if the answer cannot be parsed, every
  response gets placeholder feedback instead of failing the request
- candidate pool analysis: one AI call per batch of BATCH_SIZE candidates,
  a failed batch is logged and skipped
"""

import json
import logging
from typing import List

from utopia_hire.core.errors import AIServiceError
from utopia_hire.services import prompts
from utopia_hire.services.gemini_client import (
    EVALUATOR_PROFILE,
    INTERVIEW_PROFILE,
    GeminiClient,
    extract_json,
    get_gemini_client,
    strip_code_fences,
)

logger = logging.getLogger(__name__)

BATCH_SIZE = 2
EVALUATION_RETRY_DELAY = 2.0


def fallback_evaluations(responses: List[dict]) -> List[dict]:
    """Generic feedback used when the evaluation output is unusable."""
    return [
        {
            "question_id": r.get("question_id"),
            "ai_feedback": {
                "evaluation_summary": "Evaluation temporarily unavailable",
                "detailed_feedback": "We encountered an issue processing your response. Please try again.",
                "improvement_advice": ["Please resubmit your interview for detailed feedback"],
            },
        }
        for r in responses
    ]


def chunk(items: list, size: int) -> List[list]:
    return [items[i:i + size] for i in range(0, len(items), size)]


class AIService:

    def __init__(self, client: GeminiClient = None):
        self.client = client or get_gemini_client()

    def generate_interview(self, job: dict) -> dict:
        raw = self.client.generate_with_retry(prompts.interview_prompt(job), profile=INTERVIEW_PROFILE)
        interview = extract_json(raw)
        if not isinstance(interview, dict) or not isinstance(interview.get("sections"), list):
            raise AIServiceError("Invalid interview structure generated")
        return interview

    def evaluate_interview(self, job: dict, job_title: str, responses: List[dict]) -> List[dict]:
        raw = self.client.generate_with_retry(
            prompts.evaluation_prompt(job, job_title, responses),
            profile=EVALUATOR_PROFILE,
            base_delay=EVALUATION_RETRY_DELAY,
        )
        logger.debug("Evaluation response length=%d preview=%s", len(raw), raw[:500])

        try:
            evaluations = extract_json(raw)
            if not isinstance(evaluations, list):
                raise AIServiceError("Invalid evaluation structure generated")
        except AIServiceError as e:
            logger.error("Failed to parse evaluation JSON (%s); using fallback feedback", e)
            return fallback_evaluations(responses)

        logger.info("Parsed %d interview evaluations", len(evaluations))
        return evaluations

    def profile_feedback(self, context: dict) -> str:
        return self.client.generate(prompts.profile_feedback_prompt(context))

    def analyze_candidate(self, job: dict, candidate: dict) -> dict:
        raw = self.client.generate(prompts.candidate_analysis_prompt(job, candidate))
        try:
            analysis = json.loads(strip_code_fences(raw))
        except json.JSONDecodeError as e:
            raise AIServiceError(f"Candidate analysis was not valid JSON: {e}") from e
        if not isinstance(analysis, dict):
            raise AIServiceError("Candidate analysis was not a JSON object")
        return analysis

    def analyze_candidate_pool(self, job: dict, candidates: List[dict]) -> List[dict]:
        """
        Analyze candidates in sequential batches.
        Each candidate dict carries applicationId and profile, which are
        copied onto the matching insight.
        """
        batches = chunk(candidates, BATCH_SIZE)
        logger.info("Processing %d candidates in %d batches of %d", len(candidates), len(batches), BATCH_SIZE)

        insights: List[dict] = []
        for batch_index, batch in enumerate(batches, start=1):
            try:
                raw = self.client.generate(prompts.candidate_batch_prompt(job, batch))
                parsed = json.loads(strip_code_fences(raw))
                for insight in parsed["insights"]:
                    position = insight.get("candidateIndex")
                    source = batch[position - 1] if isinstance(position, int) and 0 < position <= len(batch) else {}
                    insights.append({
                        **insight,
                        "applicationId": source.get("applicationId"),
                        "profile": source.get("profile"),
                    })
            except Exception as e:
                logger.error("Error processing batch %d/%d: %s", batch_index, len(batches), e)
        return insights


# Singleton instance
_ai_service: AIService = None


def get_ai_service() -> AIService:
    """Get or create the AI service (singleton pattern)"""
    global _ai_service
    if _ai_service is None:
        _ai_service = AIService()
    return _ai_service

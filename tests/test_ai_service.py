import json
from unittest.mock import MagicMock, call, patch

import pytest

from utopia_hire.core.errors import AIServiceError
from utopia_hire.services.ai_service import AIService, chunk, fallback_evaluations
from utopia_hire.services.gemini_client import (
    EVALUATOR_PROFILE, GeminiClient, extract_json, strip_code_fences, with_retry
)

JOB = {"id": 7, "title": "Backend Engineer", "required_skills": ["Python"], "experience_level": "mid"}


def candidate(application_id, name):
    return {
        "applicationId": application_id,
        "profile": {"full_name": name},
        "experiences": [],
        "education": [],
        "skills": [{"name": "Python"}],
    }


# ============================================================
# JSON cleanup
# ============================================================

def test_extract_json_strips_fences():
    assert extract_json('```json\n{"sections": []}\n```') == {"sections": []}
    assert extract_json('```\n[1, 2]\n```') == [1, 2]
    assert extract_json('  {"a": 1}  ') == {"a": 1}


def test_extract_json_recovers_leading_array():
    text = '[{"question_id": 1}]\nSome trailing commentary'
    assert extract_json(text) == [{"question_id": 1}]


def test_extract_json_raises_on_garbage():
    with pytest.raises(AIServiceError):
        extract_json("I cannot help with that")


def test_strip_code_fences():
    assert strip_code_fences('```json\n{"a": 1}\n```') == '{"a": 1}\n'


def test_chunk():
    assert chunk([1, 2, 3, 4, 5], 2) == [[1, 2], [3, 4], [5]]
    assert chunk([], 2) == []


# ============================================================
# Retry
# ============================================================

@patch("utopia_hire.services.gemini_client.time.sleep")
def test_with_retry_backs_off_exponentially(mock_sleep):
    fn = MagicMock(side_effect=[RuntimeError("503"), RuntimeError("503"), "ok"])

    assert with_retry(fn, max_retries=3, base_delay=1.0) == "ok"
    assert fn.call_count == 3
    assert mock_sleep.call_args_list == [call(1.0), call(2.0)]


@patch("utopia_hire.services.gemini_client.time.sleep")
def test_with_retry_reraises_last_error(mock_sleep):
    fn = MagicMock(side_effect=[RuntimeError("first"), RuntimeError("second")])

    with pytest.raises(RuntimeError, match="second"):
        with_retry(fn, max_retries=2, base_delay=2.0)
    mock_sleep.assert_called_once_with(2.0)


# ============================================================
# Gemini client
# ============================================================

def _completion(content):
    message = MagicMock()
    message.content = content
    choice = MagicMock()
    choice.message = message
    response = MagicMock()
    response.choices = [choice]
    return response


@patch("utopia_hire.services.gemini_client.OpenAI")
def test_gemini_generate_uses_profile(mock_openai):
    create = mock_openai.return_value.chat.completions.create
    create.return_value = _completion('{"ok": true}')

    client = GeminiClient()
    assert client.generate("prompt", profile=EVALUATOR_PROFILE) == '{"ok": true}'

    kwargs = create.call_args.kwargs
    assert "response_format" not in kwargs
    assert kwargs["temperature"] == EVALUATOR_PROFILE["temperature"]
    assert kwargs["messages"] == [{"role": "user", "content": "prompt"}]


@patch("utopia_hire.services.gemini_client.OpenAI")
def test_gemini_generate_empty_response(mock_openai):
    mock_openai.return_value.chat.completions.create.return_value = _completion("")
    with pytest.raises(AIServiceError):
        GeminiClient().generate("prompt")


# ============================================================
# AI service
# ============================================================

def test_generate_interview_parses_fenced_json():
    client = MagicMock()
    client.generate_with_retry.return_value = '```json\n{"job_title": "Backend Engineer", "sections": []}\n```'

    interview = AIService(client).generate_interview(JOB)

    assert interview == {"job_title": "Backend Engineer", "sections": []}


def test_generate_interview_requires_sections():
    client = MagicMock()
    client.generate_with_retry.return_value = '{"job_title": "Backend Engineer"}'

    with pytest.raises(AIServiceError):
        AIService(client).generate_interview(JOB)


def test_evaluate_interview_uses_two_second_backoff():
    client = MagicMock()
    client.generate_with_retry.return_value = '[{"question_id": 1, "ai_feedback": {}}]'
    responses = [{"question_id": 1, "question": "Q", "answer": "A"}]

    assert AIService(client).evaluate_interview(JOB, "Backend Engineer", responses) == [
        {"question_id": 1, "ai_feedback": {}}
    ]
    assert client.generate_with_retry.call_args.kwargs["base_delay"] == 2.0
    assert "json_mode" not in client.generate_with_retry.call_args.kwargs


def test_evaluate_interview_accepts_fenced_array():
    client = MagicMock()
    client.generate_with_retry.return_value = '```json\n[{"question_id": 3, "ai_feedback": {"score": 7}}]\n```'

    evaluations = AIService(client).evaluate_interview(JOB, None, [{"question_id": 3}])

    assert evaluations == [{"question_id": 3, "ai_feedback": {"score": 7}}]


@pytest.mark.parametrize("raw", ["definitely not json", '{"question_id": 1}'])
def test_evaluate_interview_falls_back_to_placeholders(raw):
    client = MagicMock()
    client.generate_with_retry.return_value = raw
    responses = [{"question_id": 1}, {"question_id": 2}]

    evaluations = AIService(client).evaluate_interview(JOB, None, responses)

    assert evaluations == fallback_evaluations(responses)
    assert [e["question_id"] for e in evaluations] == [1, 2]
    assert evaluations[0]["ai_feedback"]["evaluation_summary"] == "Evaluation temporarily unavailable"


def test_analyze_candidate_invalid_json():
    client = MagicMock()
    client.generate.return_value = "Sorry, no JSON today"

    with pytest.raises(AIServiceError):
        AIService(client).analyze_candidate(JOB, candidate(1, "Alice"))


def test_analyze_candidate_pool_batches_and_skips_failures():
    candidates = [candidate(i, f"Candidate {i}") for i in range(1, 6)]
    client = MagicMock()
    client.generate.side_effect = [
        "```json\n" + json.dumps({"insights": [
            {"candidateIndex": 1, "quickSummary": "first"},
            {"candidateIndex": 2, "quickSummary": "second"},
        ]}) + "\n```",
        "the model rambled instead of answering",
        json.dumps({"insights": [{"candidateIndex": 1, "quickSummary": "fifth"}]}),
    ]

    insights = AIService(client).analyze_candidate_pool(JOB, candidates)

    assert client.generate.call_count == 3
    assert [i["applicationId"] for i in insights] == [1, 2, 5]
    assert insights[2]["profile"] == {"full_name": "Candidate 5"}
    assert insights[0]["quickSummary"] == "first"

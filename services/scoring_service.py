# FILE: services/scoring_service.py
import re
from typing import Optional

from flask import current_app
from pydantic import ValidationError as PydanticValidationError

from errors import SchemaError, UpstreamError
from schemas import ScoringResult


SYSTEM_PROMPT = """
You are a senior technical interviewer (Senior/Staff Engineer) reviewing a candidate's answer
in a mock interview about programming, system architecture or software technology.
Judge the answer the way a real interview would: depth, scalability, performance and design trade-offs.
Be direct, friendly and professional. Address the candidate as "you".

SCORING BANDS (0-100):
- 0-30: wrong, irrelevant, joking, refusing to answer, or a serious lack of understanding.
- 31-50: only the most basic concepts, missing technical detail, no mention of scale or performance.
- 51-70: the core ideas are there but shallow; important aspects are skipped.
- 71-85: clear and deep, covers the important aspects and design considerations; minor gaps remain.
- 86-100: complete, insightful, scalable and efficient; shows real practical experience.

ZERO SCORE RULE:
If the answer is unrelated to the question, not serious, or a refusal ("I don't know", "nothing to say",
"look it up yourself"), set "score" to 0, state plainly in "overall" that the answer does not meet the bar,
leave "strengths" empty, and list in "improvements" that better preparation and a real attempt are needed.

Respond ONLY with one valid JSON object with exactly two top-level keys:
"score" (an integer from 0 to 100) and "feedback".
"feedback" must contain exactly three keys: "overall" (a summary string),
"strengths" (an array of strings) and "improvements" (an array of strings).
Return JSON only, no other text.
""".strip()

_FENCE_RE = re.compile(r"^```(?:json)?\s*|\s*```$", re.IGNORECASE)


def _build_prompt(question_content: str, sample_answer: Optional[str], user_answer_text: str) -> str:
    parts = [f"Question: {question_content.strip()}"]
    if sample_answer and sample_answer.strip():
        parts.append(f"Reference answer (for the reviewer only): {sample_answer.strip()}")
    parts.append(f"Your answer: {user_answer_text.strip()}")
    parts.append("Evaluate my answer and give me detailed feedback.")
    return "\n\n".join(parts)


def _extract_response_text(response) -> str:
    # JSON mime type: the whole payload comes back in ``.text``.
    return (getattr(response, "text", "") or "").strip()


def _make_client(api_key: str, timeout_seconds: float):
    # Lazy import so the rest of the app loads without the Gemini package.
    from google import genai

    return genai.Client(api_key=api_key, http_options={"timeout": int(timeout_seconds * 1000)})


def parse_scoring_payload(text: str) -> ScoringResult:
    """
    Decode the provider's raw text into a ScoringResult.

    Markdown code fences around the JSON are tolerated; anything else that is
    not exactly ``{"score": int, "feedback": {"overall", "strengths", "improvements"}}``
    raises SchemaError.
    """
    cleaned = _FENCE_RE.sub("", (text or "").strip()).strip()
    try:
        return ScoringResult.model_validate_json(cleaned)
    except PydanticValidationError as exc:
        raise SchemaError(
            "Scoring provider returned a payload that does not match the feedback contract.",
            {"errors": exc.errors(include_url=False, include_context=False, include_input=False), "raw": cleaned[:500]},
        ) from exc


def score(question_content: str, sample_answer: Optional[str], user_answer_text: str) -> ScoringResult:
    # Read Gemini settings from app config.
    api_key = current_app.config.get("GEMINI_API_KEY", "").strip()
    model = current_app.config.get("GEMINI_MODEL", "gemini-2.5-flash")
    timeout_seconds = current_app.config.get("SCORING_TIMEOUT_SECONDS", 30)

    if not api_key:
        raise UpstreamError("Scoring provider is not configured (GEMINI_API_KEY is empty).")

    try:
        client = _make_client(api_key, timeout_seconds)
        response = client.models.generate_content(
            model=model,
            contents=_build_prompt(question_content, sample_answer, user_answer_text),
            config={
                "system_instruction": SYSTEM_PROMPT,
                "temperature": current_app.config.get("SCORING_TEMPERATURE", 0.3),
                "max_output_tokens": current_app.config.get("SCORING_MAX_OUTPUT_TOKENS", 1500),
                "response_mime_type": "application/json",
            },
        )
    except Exception as exc:
        current_app.logger.warning("Gemini scoring call failed: %s", exc)
        raise UpstreamError("Scoring provider call failed.", {"reason": str(exc)}) from exc

    text = _extract_response_text(response)
    if not text:
        raise UpstreamError("Scoring provider returned an empty response.")

    current_app.logger.debug("Gemini scoring response: %s", text[:500])
    try:
        result = parse_scoring_payload(text)
    except SchemaError:
        current_app.logger.warning("Gemini scoring response parse failed. Raw text: %s", text[:500])
        raise
    current_app.logger.info("Answer scored: %d", result.score)
    return result

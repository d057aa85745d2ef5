"""LLM gateway classifier.

Sends content to an OpenAI-compatible chat-completions endpoint with a
forced `phishing_analysis` tool call and parses the structured verdict.
The prompt and tool schema are a boundary payload only.
"""

from __future__ import annotations

import json
import logging
import os

import httpx
from pydantic import ValidationError

from phishscope.aggregation.insights import round_half_up
from phishscope.classifier.base import ClassificationError, ClassifierBase
from phishscope.models.domain import RISK_LEVELS, ScanType
from phishscope.models.types import ClassificationResult

logger = logging.getLogger(__name__)

DEFAULT_GATEWAY_URL = "https://ai.gateway.lovable.dev/v1/chat/completions"
DEFAULT_MODEL = "google/gemini-2.5-flash"
DEFAULT_TIMEOUT_S = 60.0

TOOL_NAME = "phishing_analysis"

SYSTEM_PROMPT = """You are an expert cybersecurity analyst specializing in phishing detection.

Analyze the provided content for phishing indicators including:
- Sender spoofing (mismatched display name vs email address)
- Urgency tactics ("Act now!", "Account suspended", "Verify immediately")
- Suspicious links (shortened URLs, misspelled domains, unusual TLDs)
- Grammar/spelling issues (common in phishing attempts)
- Credential requests (passwords, SSN, credit card numbers)
- Brand impersonation (fake bank/government/company communications)
- Malicious attachments (executable files, suspicious extensions)
- Social engineering (emotional manipulation, fear tactics, too-good-to-be-true offers)

Provide a detailed risk assessment with confidence score and actionable recommendations."""

ANALYSIS_TOOL = {
    "type": "function",
    "function": {
        "name": TOOL_NAME,
        "description": "Provide detailed phishing analysis with risk assessment",
        "parameters": {
            "type": "object",
            "properties": {
                "risk_level": {
                    "type": "string",
                    "enum": list(RISK_LEVELS),
                    "description": "Overall threat level",
                },
                "confidence_score": {
                    "type": "number",
                    "minimum": 0,
                    "maximum": 100,
                    "description": "Confidence in the assessment (0-100)",
                },
                "indicators": {
                    "type": "array",
                    "items": {
                        "type": "object",
                        "properties": {
                            "type": {
                                "type": "string",
                                "description": "Type of indicator (e.g., 'suspicious_link', 'urgency_language')",
                            },
                            "severity": {"type": "string", "enum": ["info", "warning", "danger"]},
                            "description": {
                                "type": "string",
                                "description": "Detailed explanation of what was detected",
                            },
                        },
                        "required": ["type", "severity", "description"],
                    },
                },
                "summary": {"type": "string", "description": "Brief summary of findings"},
                "recommendations": {"type": "string", "description": "Actionable steps to take"},
            },
            "required": [
                "risk_level",
                "confidence_score",
                "indicators",
                "summary",
                "recommendations",
            ],
        },
    },
}

RATE_LIMIT_MESSAGE = "Rate limit exceeded. Please try again in a moment."
CREDITS_MESSAGE = "AI credits exhausted. Please add more credits to continue."


class GatewayClassifier(ClassifierBase):
    """Classifier backed by a hosted LLM gateway.

    Configuration falls back to PHISHSCOPE_GATEWAY_URL,
    PHISHSCOPE_GATEWAY_API_KEY and PHISHSCOPE_MODEL.
    """

    def __init__(
        self,
        api_key: str | None = None,
        url: str | None = None,
        model: str | None = None,
        client: httpx.Client | None = None,
        timeout: float = DEFAULT_TIMEOUT_S,
    ):
        """Initialize gateway classifier.

        Args:
            api_key: Gateway bearer token.
            url: Chat-completions endpoint.
            model: Model identifier sent with each request.
            client: Optional preconfigured httpx client (tests inject one).
            timeout: Request timeout in seconds.
        """
        self.api_key = api_key or os.environ.get("PHISHSCOPE_GATEWAY_API_KEY")
        self.url = url or os.environ.get("PHISHSCOPE_GATEWAY_URL", DEFAULT_GATEWAY_URL)
        self.model = model or os.environ.get("PHISHSCOPE_MODEL", DEFAULT_MODEL)
        self._client = client
        self.timeout = timeout

    def build_payload(self, content: str, scan_type: ScanType) -> dict:
        """Build the chat-completions request body."""
        return {
            "model": self.model,
            "messages": [
                {"role": "system", "content": SYSTEM_PROMPT},
                {"role": "user", "content": f"Analyze this {scan_type}: {content}"},
            ],
            "tools": [ANALYSIS_TOOL],
            "tool_choice": {"type": "function", "function": {"name": TOOL_NAME}},
        }

    def classify(self, content: str, scan_type: ScanType) -> ClassificationResult:
        if not self.api_key:
            raise ClassificationError(500, "PHISHSCOPE_GATEWAY_API_KEY is not configured")

        logger.info(f"Analyzing {scan_type} content...")
        response = self._post(self.build_payload(content, scan_type))

        if response.status_code == 429:
            raise ClassificationError(429, RATE_LIMIT_MESSAGE)
        if response.status_code == 402:
            raise ClassificationError(402, CREDITS_MESSAGE)
        if response.is_error:
            logger.warning(f"AI gateway error: {response.status_code} {response.text}")
            raise ClassificationError(500, f"AI gateway error: {response.status_code}")

        try:
            body = response.json()
        except ValueError as e:
            logger.warning(f"AI gateway returned non-JSON body: {response.text[:200]}")
            raise ClassificationError(500, "Invalid AI response format") from e

        result = parse_tool_response(body)
        logger.info("AI response received")
        return result

    def _post(self, payload: dict) -> httpx.Response:
        headers = {"Authorization": f"Bearer {self.api_key}"}
        try:
            if self._client is not None:
                return self._client.post(self.url, json=payload, headers=headers)
            with httpx.Client(timeout=self.timeout) as client:
                return client.post(self.url, json=payload, headers=headers)
        except httpx.HTTPError as e:
            logger.warning(f"AI gateway request failed: {e}")
            raise ClassificationError(500, f"AI gateway request failed: {e}") from e


def parse_tool_response(body: dict) -> ClassificationResult:
    """Extract the phishing_analysis tool call from a gateway response.

    Raises:
        ClassificationError: 500 if the response has no matching tool call
            or its arguments do not form a valid verdict.
    """
    try:
        tool_call = body["choices"][0]["message"]["tool_calls"][0]
        function = tool_call["function"]
    except (KeyError, IndexError, TypeError) as e:
        raise ClassificationError(500, "Invalid AI response format") from e

    if function.get("name") != TOOL_NAME:
        raise ClassificationError(500, "Invalid AI response format")

    try:
        analysis = json.loads(function["arguments"])
        analysis["confidence_score"] = clamp_confidence(analysis["confidence_score"])
        return ClassificationResult(**analysis)
    except (KeyError, TypeError, ValueError, OverflowError, ValidationError) as e:
        raise ClassificationError(500, "Invalid AI response format") from e


def clamp_confidence(value: float) -> int:
    """Coerce a model-reported confidence to an int in [0, 100].

    Rounds half up like the analytics figures. Non-finite values raise
    OverflowError or ValueError.
    """
    return min(max(round_half_up(float(value)), 0), 100)

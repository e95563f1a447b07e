"""Scorer that delegates the vision work to Claude's multimodal API."""

from __future__ import annotations

import json
import logging
from typing import Any, Dict, List, Optional

import anthropic
from pydantic import BaseModel, ConfigDict, Field
from pydantic import ValidationError as PayloadValidationError

from ..config import BCSSettings, get_settings
from ..errors import (
    AuthError,
    BackendError,
    ConfigurationError,
    RateLimitError,
    ResponseFormatError,
)
from ..image_utils import EncodedImage
from ..lazy import LazyHandle
from ..types import ClassificationLabel, PredictionAnalysis, PredictionResult
from .base import BCSScorer, ImagesInput, normalize_images

logger = logging.getLogger(__name__)

MAX_RECOMMENDATIONS = 3

BCS_PROMPT = """Please analyze {subject} and provide a Body Condition Score (BCS) for the dog shown. The BCS scale is from 1-9 where:

1-3: Underweight (ribs, spine, and hip bones very visible)
4-5: Ideal weight (ribs palpable with slight fat cover, visible waist, abdominal tuck)
6-7: Overweight (ribs difficult to feel, waist barely visible, minimal abdominal tuck)
8-9: Obese (ribs not palpable, no waist, abdomen distended)

Please respond in the following JSON format:
{{
  "bcsScore": <number 1-9>,
  "confidence": <number 0-1>,
  "isDogDetected": <boolean>,
  "waistDefinition": <number 0-1>,
  "bodyShape": <number 0-1>,
  "overallCondition": <number 0-1>,
  "recommendations": [<array of 2-3 recommendation strings>],
  "reasoning": "<brief explanation of the assessment>"
}}

Provide realistic confidence based on image quality and visibility of key features. Be honest if the image quality or angle makes assessment difficult."""


def build_prompt(image_count: int) -> str:
    if image_count > 1:
        subject = "these images (the first is a side view of the dog, the second a top view)"
    else:
        subject = "this image"
    return BCS_PROMPT.format(subject=subject)


class RemoteAssessment(BaseModel):
    """JSON object the model is asked to return."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    bcs_score: int = Field(alias="bcsScore", ge=1, le=9)
    confidence: float = Field(ge=0.0, le=1.0)
    is_dog_detected: bool = Field(alias="isDogDetected")
    waist_definition: float = Field(alias="waistDefinition", ge=0.0, le=1.0)
    body_shape: float = Field(alias="bodyShape", ge=0.0, le=1.0)
    overall_condition: float = Field(alias="overallCondition", ge=0.0, le=1.0)
    recommendations: List[str] = Field(min_length=2)
    reasoning: Optional[str] = None


def extract_json_object(text: str) -> Dict[str, Any]:
    """Return the first syntactically complete JSON object embedded in ``text``.

    Each ``{`` is tried in turn with ``raw_decode``, so prose and stray braces
    before the real payload are skipped instead of swallowed by a greedy match.
    """

    decoder = json.JSONDecoder()
    start = text.find("{")
    if start == -1:
        raise ResponseFormatError("Could not parse JSON response from the AI model.")

    while start != -1:
        try:
            candidate, _ = decoder.raw_decode(text, start)
        except json.JSONDecodeError:
            pass
        else:
            if isinstance(candidate, dict):
                return candidate
        start = text.find("{", start + 1)

    raise ResponseFormatError("Failed to parse AI response. Please try again.")


def parse_prediction(text: str) -> PredictionResult:
    """Map a model reply onto the shared result contract."""

    payload = extract_json_object(text)
    try:
        assessment = RemoteAssessment.model_validate(payload)
    except PayloadValidationError as exc:
        logger.warning("AI response failed validation: %s", exc)
        raise ResponseFormatError("Failed to parse AI response. Please try again.") from exc

    detected = (
        (ClassificationLabel(class_name="Dog", probability=assessment.confidence),)
        if assessment.is_dog_detected
        else ()
    )
    return PredictionResult(
        bcs_score=assessment.bcs_score,
        confidence=assessment.confidence,
        analysis=PredictionAnalysis(
            waist_definition=assessment.waist_definition,
            body_shape=assessment.body_shape,
            overall_condition=assessment.overall_condition,
            is_dog_detected=assessment.is_dog_detected,
            detected_objects=detected,
        ),
        recommendations=tuple(assessment.recommendations[:MAX_RECOMMENDATIONS]),
        reasoning=assessment.reasoning,
    )


class RemoteVisionScorer(BCSScorer):
    """Sends the photos plus a structured prompt to Claude and parses the reply.

    Failures are never retried here; each one surfaces as its own error kind
    so the caller can back off or switch to the manual assessment.
    """

    method = "remote"

    def __init__(
        self,
        settings: Optional[BCSSettings] = None,
        client_handle: Optional[LazyHandle] = None,
    ) -> None:
        self.settings = settings or get_settings()
        self._client = client_handle if client_handle is not None else LazyHandle(self._build_client)

    async def predict(self, images: ImagesInput) -> PredictionResult:
        if not self.settings.has_api_key:
            raise ConfigurationError(
                "Anthropic API key not configured. Please add ANTHROPIC_API_KEY to your .env file."
            )
        encoded = normalize_images(images)
        client = self._client.get()

        logger.info("Sending %d image(s) to %s for BCS analysis", len(encoded), self.settings.bcs_remote_model)
        try:
            message = await client.messages.create(
                model=self.settings.bcs_remote_model,
                max_tokens=self.settings.bcs_max_tokens,
                messages=[{"role": "user", "content": self._build_content(encoded)}],
            )
        except anthropic.AuthenticationError as exc:
            raise AuthError("Invalid API key. Please check your Anthropic API key.") from exc
        except anthropic.RateLimitError as exc:
            raise RateLimitError("API rate limit exceeded. Please try again in a moment.") from exc
        except anthropic.APIError as exc:
            logger.warning("Remote BCS analysis failed: %s", exc)
            raise BackendError(f"AI analysis failed: {exc}") from exc

        text = self._response_text(message)
        logger.debug("Model response: %s", text)
        result = parse_prediction(text)
        logger.info("Remote BCS estimate %d (confidence %.2f)", result.bcs_score, result.confidence)
        return result

    async def close(self) -> None:
        """Release HTTP resources held by the client, if it was ever built."""

        if self._client.is_loaded:
            await self._client.get().close()
            self._client.reset()

    def _build_client(self) -> anthropic.AsyncAnthropic:
        logger.info("Initializing Anthropic API client")
        return anthropic.AsyncAnthropic(
            api_key=self.settings.anthropic_api_key,
            timeout=self.settings.bcs_request_timeout,
            max_retries=0,
        )

    @staticmethod
    def _build_content(images: List[EncodedImage]) -> List[Dict[str, Any]]:
        content: List[Dict[str, Any]] = [
            {
                "type": "image",
                "source": {"type": "base64", "media_type": image.mime_type, "data": image.base64},
            }
            for image in images
        ]
        content.append({"type": "text", "text": build_prompt(len(images))})
        return content

    @staticmethod
    def _response_text(message: Any) -> str:
        blocks = getattr(message, "content", None) or []
        text = "".join(getattr(block, "text", "") for block in blocks if getattr(block, "type", None) == "text")
        if not text:
            raise ResponseFormatError("The AI model returned an empty response.")
        return text

"""Coaching operations: scene analysis, reference images, pose scoring, landmarks.

Architectural role:
    Bridges prompt construction (`posecoach.prompting`) and response schemas
    (`posecoach.coaching.schemas`) to the transport connector (`posecoach.llm`).

Control-flow model (per operation):
    1. Build prompt text and ordered content parts.
    2. Call `connector.generate_content` off the event loop (`asyncio.to_thread`).
    3. Parse the response text as JSON (or pick the inline image part).
    4. Validate the parsed JSON against the pydantic model mirroring the schema.

Failure policies:
    Each operation has a `FailurePolicy`. `PROPAGATE` logs and re-raises the
    original exception object; `SUPPRESS` logs and returns the operation's absent
    value (`None`, or `""` for the reference image). Defaults propagate for
    everything except landmark extraction, which is best-effort.

Concurrency:
    Operations share no mutable state. The connector is injected once and reused by
    every call; each call issues exactly one request, with no retries.
"""

import asyncio
import json
import logging
from enum import Enum
from typing import Protocol, Sequence, Type

from pydantic import BaseModel, ValidationError

from posecoach.errors import ResponseParseError, ResponseShapeError
from posecoach.llm.client import (
    ContentPart,
    GeminiConnector,
    GenerateContentResponse,
    GenerationConfig,
)
from posecoach.llm.provider_config import (
    ANALYSIS_MODEL_NAME,
    IMAGE_MIME_TYPE,
    IMAGE_MODEL_NAME,
    JSON_MIME_TYPE,
    VALIDATE_RESPONSES,
)
from posecoach.prompting.prompt_builder import (
    build_landmark_extraction_prompt,
    build_pose_evaluation_prompt,
    build_pose_reference_prompt,
    build_scene_analysis_prompt,
)
from .schemas import (
    ANALYSIS_SCHEMA,
    FEEDBACK_SCHEMA,
    LANDMARKS_SCHEMA,
    AnalysisResult,
    PoseFeedback,
    PoseLandmarks,
)


logger = logging.getLogger(__name__)


class FailurePolicy(str, Enum):
    """What an operation does after logging a failure."""
    PROPAGATE = "propagate"
    SUPPRESS = "suppress"


ANALYZE_SCENE = "analyze_scene"
GENERATE_POSE_REFERENCE = "generate_pose_reference"
EVALUATE_POSE_MATCH = "evaluate_pose_match"
EXTRACT_POSE_LANDMARKS = "extract_pose_landmarks"

DEFAULT_FAILURE_POLICIES = {
    ANALYZE_SCENE: FailurePolicy.PROPAGATE,
    GENERATE_POSE_REFERENCE: FailurePolicy.PROPAGATE,
    EVALUATE_POSE_MATCH: FailurePolicy.PROPAGATE,
    # Landmarks are an optional overlay; callers treat "no landmarks" as normal.
    EXTRACT_POSE_LANDMARKS: FailurePolicy.SUPPRESS,
}

_FAILURE_LABELS = {
    ANALYZE_SCENE: "Analysis failed",
    GENERATE_POSE_REFERENCE: "Reference image failed",
    EVALUATE_POSE_MATCH: "Evaluation failed",
    EXTRACT_POSE_LANDMARKS: "Landmark extraction failed",
}


class ConnectorProtocol(Protocol):
    """Minimal interface required from the generative-AI connector."""

    def generate_content(
        self,
        model: str,
        parts: Sequence[ContentPart],
        config: GenerationConfig | None = None,
    ) -> GenerateContentResponse:
        ...


def parse_json_response(text: str, model_cls: Type[BaseModel] | None = None):
    """Parse response text as JSON and optionally validate it.

    Args:
        text: Raw response text.
        model_cls: Pydantic model mirroring the requested schema, or `None` to
            return the decoded JSON unchecked.

    Returns:
        Validated model instance, or the decoded JSON value.

    Raises:
        ResponseParseError: empty text or invalid JSON.
        ResponseShapeError: JSON does not match `model_cls`, including values
            of the wrong JSON type (e.g. a quoted number).
    """
    if not text or not text.strip():
        raise ResponseParseError("Response body was empty")

    try:
        data = json.loads(text)
    except json.JSONDecodeError as err:
        raise ResponseParseError(f"Response is not valid JSON: {err.msg}") from err

    if model_cls is None:
        return data

    # Strict JSON mode: no string-to-number or bool-to-int coercion.
    try:
        return model_cls.model_validate_json(text, strict=True)
    except ValidationError as err:
        raise ResponseShapeError(
            model_cls.__name__, err.errors(include_url=False)
        ) from err


class CoachingClient:
    """
    AI coaching client over an injected connector.

    Example usage:
        client = CoachingClient(GeminiConnector(api_key="..."))
        analysis = await client.analyze_scene(image_b64, Gender.FEMALE, PoseStyle.CASUAL)
        print(analysis.suggested_pose.title)
    """

    def __init__(
        self,
        connector: ConnectorProtocol,
        *,
        analysis_model: str = ANALYSIS_MODEL_NAME,
        image_model: str = IMAGE_MODEL_NAME,
        failure_policies: dict[str, FailurePolicy] | None = None,
        validate_responses: bool = VALIDATE_RESPONSES,
    ):
        self.connector = connector
        self.analysis_model = analysis_model
        self.image_model = image_model
        self.validate_responses = validate_responses

        policies = dict(DEFAULT_FAILURE_POLICIES)
        for operation, policy in (failure_policies or {}).items():
            if operation not in DEFAULT_FAILURE_POLICIES:
                raise ValueError(f"Unknown operation: {operation}")
            policies[operation] = FailurePolicy(policy)
        self.failure_policies = policies

    # -----------------------------------------------------
    # Internal helpers
    # -----------------------------------------------------

    async def _generate(
        self,
        model: str,
        parts: list[ContentPart],
        config: GenerationConfig | None = None,
    ) -> GenerateContentResponse:
        return await asyncio.to_thread(self.connector.generate_content, model, parts, config)

    async def _request_json(self, parts: list[ContentPart], schema: dict, model_cls):
        config = GenerationConfig(response_mime_type=JSON_MIME_TYPE, response_schema=schema)
        response = await self._generate(self.analysis_model, parts, config)
        return parse_json_response(
            response.text, model_cls if self.validate_responses else None
        )

    def _on_failure(self, operation: str, err: Exception, absent):
        """Log a failed operation, then re-raise or return its absent value."""
        logger.exception("%s: %s", _FAILURE_LABELS[operation], err)
        if self.failure_policies[operation] is FailurePolicy.PROPAGATE:
            raise err
        return absent

    # -----------------------------------------------------
    # Operations
    # -----------------------------------------------------

    async def analyze_scene(
        self,
        image_base64: str,
        gender,
        style,
        mime_type: str = IMAGE_MIME_TYPE,
    ) -> AnalysisResult | None:
        """Analyze a scene photo and suggest a pose.

        Args:
            image_base64: Base64-encoded JPEG, forwarded untouched.
            gender: `Gender` member or raw label (not validated).
            style: `PoseStyle` member or raw label (not validated).
            mime_type: MIME type of the supplied image.

        Returns:
            `AnalysisResult` (a plain dict when validation is disabled), or `None`
            when the failure policy is `SUPPRESS` and the call failed.
        """
        parts = [
            ContentPart.from_image(image_base64, mime_type),
            ContentPart.from_text(build_scene_analysis_prompt(gender, style)),
        ]
        try:
            return await self._request_json(parts, ANALYSIS_SCHEMA, AnalysisResult)
        except Exception as err:
            return self._on_failure(ANALYZE_SCENE, err, None)

    async def generate_pose_reference(self, pose_description: str, gender, style) -> str:
        """Generate a reference image for a pose.

        Returns:
            Base64 payload of the first inline image part. An empty string when the
            response carries no image data; this is a degraded result, not an error.
        """
        parts = [
            ContentPart.from_text(build_pose_reference_prompt(pose_description, gender, style)),
        ]
        try:
            response = await self._generate(self.image_model, parts)
        except Exception as err:
            return self._on_failure(GENERATE_POSE_REFERENCE, err, "")

        image = response.first_inline_data()
        if image is None:
            logger.warning("Reference image response contained no inline image data")
            return ""
        return image.data

    async def evaluate_pose_match(
        self,
        image_base64: str,
        target_pose_description: str,
        mime_type: str = IMAGE_MIME_TYPE,
    ) -> PoseFeedback | None:
        """Score how closely a photo matches the target pose description."""
        parts = [
            ContentPart.from_image(image_base64, mime_type),
            ContentPart.from_text(build_pose_evaluation_prompt(target_pose_description)),
        ]
        try:
            return await self._request_json(parts, FEEDBACK_SCHEMA, PoseFeedback)
        except Exception as err:
            return self._on_failure(EVALUATE_POSE_MATCH, err, None)

    async def extract_pose_landmarks(
        self,
        image_base64: str,
        mime_type: str = IMAGE_MIME_TYPE,
    ) -> PoseLandmarks | None:
        """Extract normalized body landmarks; `None` when extraction fails."""
        parts = [
            ContentPart.from_image(image_base64, mime_type),
            ContentPart.from_text(build_landmark_extraction_prompt()),
        ]
        try:
            return await self._request_json(parts, LANDMARKS_SCHEMA, PoseLandmarks)
        except Exception as err:
            return self._on_failure(EXTRACT_POSE_LANDMARKS, err, None)


# =========================================================
# Default client
# =========================================================

_DEFAULT_CLIENT: CoachingClient | None = None


def set_default_client(client: CoachingClient | None) -> None:
    """Override or clear the process-wide client used by module-level functions."""
    global _DEFAULT_CLIENT
    _DEFAULT_CLIENT = client


def get_default_client() -> CoachingClient:
    """Return the process-wide client, building it from configuration once."""
    global _DEFAULT_CLIENT
    if _DEFAULT_CLIENT is None:
        _DEFAULT_CLIENT = CoachingClient(GeminiConnector.from_config())
    return _DEFAULT_CLIENT


async def analyze_scene(
    image_base64: str, gender, style, mime_type: str = IMAGE_MIME_TYPE
) -> AnalysisResult | None:
    return await get_default_client().analyze_scene(
        image_base64, gender, style, mime_type=mime_type
    )


async def generate_pose_reference(pose_description: str, gender, style) -> str:
    return await get_default_client().generate_pose_reference(pose_description, gender, style)


async def evaluate_pose_match(
    image_base64: str, target_pose_description: str, mime_type: str = IMAGE_MIME_TYPE
) -> PoseFeedback | None:
    return await get_default_client().evaluate_pose_match(
        image_base64, target_pose_description, mime_type=mime_type
    )


async def extract_pose_landmarks(
    image_base64: str, mime_type: str = IMAGE_MIME_TYPE
) -> PoseLandmarks | None:
    return await get_default_client().extract_pose_landmarks(image_base64, mime_type=mime_type)

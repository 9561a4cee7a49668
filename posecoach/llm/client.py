"""Gemini transport client for content-generation requests.

Architectural role:
    Executes HTTP requests against the Gemini `generateContent` endpoint and
    normalizes the response into text and inline-data parts.

Model invocation flow:
    `coaching.service.CoachingClient` -> `GeminiConnector.generate_content(model,
    parts, config)` -> request payload -> `requests.post` -> `GenerateContentResponse`.

Retry behavior:
    No retry loop is implemented. Each HTTP call is attempted once with the
    configured timeout.

Concurrency:
    The connector holds only the static credential and endpoint settings. Every call
    issues its own `requests.post`, so one instance can be shared by concurrent
    operations.

Failure handling model:
    Missing credentials and request/HTTP failures raise `ConnectorError` with a
    sanitized message. The raw provider body is never placed in the message.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Sequence

import requests

from posecoach.errors import ConnectorError
from posecoach.llm.provider_config import (
    GEMINI_KEY_FILE,
    GEMINI_URL_TEMPLATE,
    REQUEST_TIMEOUT,
    load_key,
)


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class InlineData:
    """Raw bytes (base64-encoded) plus their MIME type."""

    mime_type: str
    data: str


@dataclass(frozen=True)
class ContentPart:
    """One unit of request or response content: text or inline data."""

    text: str | None = None
    inline_data: InlineData | None = None

    @classmethod
    def from_text(cls, text: str) -> "ContentPart":
        return cls(text=text)

    @classmethod
    def from_image(cls, data: str, mime_type: str) -> "ContentPart":
        return cls(inline_data=InlineData(mime_type=mime_type, data=data))

    def to_payload(self) -> dict:
        if self.inline_data is not None:
            return {
                "inlineData": {
                    "mimeType": self.inline_data.mime_type,
                    "data": self.inline_data.data,
                }
            }
        return {"text": self.text or ""}

    @classmethod
    def from_payload(cls, payload: dict) -> "ContentPart":
        inline = payload.get("inlineData") or payload.get("inline_data")
        if isinstance(inline, dict):
            return cls(
                inline_data=InlineData(
                    mime_type=inline.get("mimeType") or inline.get("mime_type") or "",
                    data=inline.get("data") or "",
                )
            )
        return cls(text=payload.get("text"))


@dataclass(frozen=True)
class GenerationConfig:
    """Optional output constraints: response MIME type and structural schema."""

    response_mime_type: str | None = None
    response_schema: dict | None = None

    def to_payload(self) -> dict:
        payload = {}
        if self.response_mime_type:
            payload["responseMimeType"] = self.response_mime_type
        if self.response_schema is not None:
            payload["responseSchema"] = self.response_schema
        return payload


@dataclass(frozen=True)
class GenerateContentResponse:
    """Normalized view of the first candidate of a `generateContent` response.

    Attributes:
        parts: All content parts of the first candidate, in order.
        raw: Decoded response body, kept for diagnostics.
    """

    parts: tuple[ContentPart, ...] = ()
    raw: dict = field(default_factory=dict, repr=False, compare=False)

    @property
    def text(self) -> str:
        """Concatenated text of all text parts (empty string when none)."""
        return "".join(p.text for p in self.parts if p.text)

    def first_inline_data(self) -> InlineData | None:
        """Return the first part carrying inline data, or `None`."""
        for part in self.parts:
            if part.inline_data is not None:
                return part.inline_data
        return None

    @classmethod
    def from_payload(cls, data: dict) -> "GenerateContentResponse":
        candidates = data.get("candidates") or []
        if not candidates:
            return cls(parts=(), raw=data)
        content = candidates[0].get("content") or {}
        parts = tuple(
            ContentPart.from_payload(p)
            for p in content.get("parts") or []
            if isinstance(p, dict)
        )
        return cls(parts=parts, raw=data)


def build_request_payload(
    parts: Sequence[ContentPart],
    config: GenerationConfig | None = None,
) -> dict:
    """Build the Gemini request body for one user turn.

    Args:
        parts: Ordered content parts (images and text).
        config: Optional output constraints mapped to `generationConfig`.

    Returns:
        JSON-serializable request body.
    """
    payload: dict[str, Any] = {
        "contents": [
            {
                "role": "user",
                "parts": [part.to_payload() for part in parts],
            }
        ]
    }

    if config is not None:
        generation_config = config.to_payload()
        if generation_config:
            payload["generationConfig"] = generation_config

    return payload


def _build_sanitized_http_error(err: requests.exceptions.RequestException) -> ConnectorError:
    """Build a status-labeled connector error without exposing raw internals."""
    status_code = None
    if getattr(err, "response", None) is not None:
        status_code = getattr(err.response, "status_code", None)

    if status_code:
        return ConnectorError(f"GEMINI HTTP ERROR ({status_code})", status_code=status_code)
    return ConnectorError("GEMINI HTTP ERROR")


class GeminiConnector:
    """Authenticated handle to the Gemini content-generation service.

    Example usage:
        connector = GeminiConnector(api_key="...")
        response = connector.generate_content(
            "gemini-2.5-flash",
            [ContentPart.from_text("Describe this pose.")],
        )
        print(response.text)
    """

    def __init__(
        self,
        api_key: str | None = None,
        url_template: str = GEMINI_URL_TEMPLATE,
        timeout: float = REQUEST_TIMEOUT,
    ):
        self.api_key = api_key
        self.url_template = url_template
        self.timeout = timeout

    @classmethod
    def from_config(cls) -> "GeminiConnector":
        """Create a connector from `provider_config` (env var or key file)."""
        return cls(api_key=load_key(GEMINI_KEY_FILE))

    def generate_content(
        self,
        model: str,
        parts: Sequence[ContentPart],
        config: GenerationConfig | None = None,
    ) -> GenerateContentResponse:
        """Send one generation request and return the normalized response.

        Args:
            model: Model identifier, for example `"gemini-2.5-flash"`.
            parts: Ordered request content parts.
            config: Optional response MIME type and schema.

        Returns:
            `GenerateContentResponse` for the first candidate.

        Raises:
            ConnectorError: missing API key, network failure, non-2xx status, or a
                response body that is not JSON.
        """
        if not self.api_key:
            raise ConnectorError("GEMINI API KEY NOT CONFIGURED")

        url = self.url_template.format(model=model)
        headers = {
            "x-goog-api-key": self.api_key,
            "Content-Type": "application/json",
        }
        payload = build_request_payload(parts, config)

        logger.debug("generateContent model=%s parts=%d", model, len(parts))

        try:
            response = requests.post(
                url,
                headers=headers,
                json=payload,
                timeout=self.timeout,
            )
            response.raise_for_status()
        except requests.exceptions.RequestException as err:
            raise _build_sanitized_http_error(err) from err

        try:
            data = response.json()
        except ValueError as err:
            raise ConnectorError(
                "GEMINI RESPONSE WAS NOT JSON", status_code=response.status_code
            ) from err

        return GenerateContentResponse.from_payload(data)

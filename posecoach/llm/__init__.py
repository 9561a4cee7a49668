"""Gemini access package.

Architectural role:
    Provides provider configuration and the transport connector used by the
    coaching operations to invoke the hosted generative-AI service.

Module split:
    - `provider_config`: environment-driven model, endpoint and key configuration.
    - `client`: `GeminiConnector`, request payload construction and response parsing.
"""

from .client import (
    ContentPart,
    GeminiConnector,
    GenerateContentResponse,
    GenerationConfig,
    InlineData,
)

__all__ = [
    "ContentPart",
    "GeminiConnector",
    "GenerateContentResponse",
    "GenerationConfig",
    "InlineData",
]

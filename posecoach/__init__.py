"""posecoach: AI coaching client for a pose photography app.

Packages:
    - `llm`: Gemini provider configuration and transport connector.
    - `prompting`: prompt builders for each coaching operation.
    - `coaching`: data model, response schemas and the four operations.
    - `api`: optional FastAPI adapter exposing the operations over HTTP.
"""

from posecoach.errors import (
    CoachingError,
    ConnectorError,
    ResponseParseError,
    ResponseShapeError,
)

__version__ = "0.1.0"

__all__ = [
    "CoachingError",
    "ConnectorError",
    "ResponseParseError",
    "ResponseShapeError",
]

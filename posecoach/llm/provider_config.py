"""Provider/runtime configuration for the Gemini connector.

Architectural role:
    Centralizes model selection, endpoint layout and credential lookup for
    `posecoach.llm.client` and `posecoach.coaching.service`.

Model call flow integration:
    - `client.GeminiConnector` consumes `GEMINI_URL_TEMPLATE`, `REQUEST_TIMEOUT`
      and the key resolved by `load_key`.
    - `service.CoachingClient` consumes `ANALYSIS_MODEL_NAME`, `IMAGE_MODEL_NAME`
      and `VALIDATE_RESPONSES`.

Determinism:
    Deterministic for a fixed process environment and key files. Values are resolved
    once at import time (plus runtime key-file reads in `load_key`).

Failure behavior:
    Missing key material is represented as `None` and surfaced by the connector as
    `ConnectorError` on first use.
"""

import os
from dotenv import load_dotenv

load_dotenv()


def _env_flag(name: str, default: bool) -> bool:
    """Read a boolean switch from the environment (`1/true/yes/on`)."""
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")


# Model used for scene analysis, pose evaluation and landmark extraction.
ANALYSIS_MODEL_NAME = os.getenv("GEMINI_MODEL_NAME", "gemini-2.5-flash")

# Model used for reference-pose image generation.
IMAGE_MODEL_NAME = os.getenv("GEMINI_IMAGE_MODEL_NAME", "gemini-2.5-flash-image")

GEMINI_URL_TEMPLATE = os.getenv(
    "GEMINI_URL_TEMPLATE",
    "https://generativelanguage.googleapis.com/v1beta/models/"
    "{model}:generateContent",
)

GEMINI_KEY_FILE = "config/gemini.key"

REQUEST_TIMEOUT = float(os.getenv("GEMINI_TIMEOUT_SECONDS", "120"))

# Caller-supplied images are JPEG frames captured by the app.
IMAGE_MIME_TYPE = "image/jpeg"
JSON_MIME_TYPE = "application/json"

# Structural validation of parsed responses against the declared schemas.
VALIDATE_RESPONSES = _env_flag("VALIDATE_RESPONSES", True)


def load_key(path):
    """Load API key from environment override or key file.

    Resolution order:
        1. Environment variable inferred from file stem (for example
           `config/gemini.key` -> `GEMINI_API_KEY`).
        2. Raw file contents at `path`.

    Args:
        path: Configured key file path or `None`.

    Returns:
        Key string or `None` when not available.

    Edge cases:
        - `None` path returns `None`.
        - Missing or empty file returns `None`.
    """
    if not path:
        return None
    key_name = os.path.splitext(os.path.basename(path))[0].upper() + "_API_KEY"
    env_value = os.getenv(key_name)
    if env_value:
        return env_value
    if not os.path.exists(path):
        return None
    with open(path, "r") as f:
        return f.read().strip() or None

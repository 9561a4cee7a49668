"""
HTTP API adapter for the posecoach operations.

Architectural role:
- Expose the four coaching operations to browser clients so the Gemini API key
  stays server-side.
- Enforce adapter-level input validation (image payload shape and size).
- Delegate all model work to `posecoach.coaching.service.CoachingClient`.
- Map coaching errors to HTTP status codes.

Endpoint responsibilities:
- `GET /health`: liveness plus configured model ids.
- `POST /v1/scene/analyze`: scene analysis and pose suggestion.
- `POST /v1/pose/reference`: reference image generation.
- `POST /v1/pose/evaluate`: pose-match scoring.
- `POST /v1/pose/landmarks`: best-effort landmark extraction.

Input validation behavior:
- Body shape errors -> FastAPI default HTTP 422.
- Empty, malformed, unsupported or oversize images -> HTTP 400.

Error handling strategy:
- `ConnectorError` -> HTTP 502 `upstream_unavailable` (status code from the
  service echoed as `upstream_status`).
- `ResponseParseError` -> HTTP 502 `invalid_upstream_response`.
- `ResponseShapeError` -> HTTP 502 `upstream_schema_mismatch`.
- Landmark failures never reach this layer; they arrive as `landmarks: null`.
- A client configured with `FailurePolicy.SUPPRESS` for scene analysis or pose
  evaluation turns failures into HTTP 200 with a JSON `null` body; callers of
  those endpoints must treat `null` as "no result". Reference images degrade to
  `{"image_base64": ""}` instead.

Side effects:
- Loads environment variables at import time via `load_dotenv()`.
- Builds the default coaching client lazily on first request.
"""

from dotenv import load_dotenv

load_dotenv()

import logging

from fastapi import Depends, FastAPI, HTTPException, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from posecoach.coaching.schemas import Gender, PoseStyle
from posecoach.coaching.service import CoachingClient, get_default_client
from posecoach.errors import ConnectorError, ResponseParseError, ResponseShapeError
from posecoach.api.image_input import resolve_image_input


logger = logging.getLogger(__name__)

app = FastAPI(
    title="posecoach API",
    description="Scene analysis, reference poses and pose scoring for photographers.",
    version="0.1.0",
)


# ============================================================
# Request Schemas
# ============================================================

# Labels are free text: known enum values are listed for documentation only and
# any other label is forwarded to the prompt verbatim.
_GENDER_DESCRIPTION = "Subject gender label, e.g. " + ", ".join(g.value for g in Gender)
_STYLE_DESCRIPTION = "Pose style label, e.g. " + ", ".join(s.value for s in PoseStyle)


class SceneAnalysisRequest(BaseModel):
    image_base64: str = Field(..., description="Base64 JPEG or data URL")
    gender: str = Field(..., description=_GENDER_DESCRIPTION)
    style: str = Field(..., description=_STYLE_DESCRIPTION)


class PoseReferenceRequest(BaseModel):
    pose_description: str = Field(..., min_length=1)
    gender: str = Field(..., description=_GENDER_DESCRIPTION)
    style: str = Field(..., description=_STYLE_DESCRIPTION)


class PoseEvaluationRequest(BaseModel):
    image_base64: str
    target_pose_description: str = Field(..., min_length=1)


class LandmarkRequest(BaseModel):
    image_base64: str


# ============================================================
# Dependencies / helpers
# ============================================================

def get_client() -> CoachingClient:
    """Return the coaching client; overridden in tests via `dependency_overrides`."""
    return get_default_client()


def _image_or_400(value: str) -> tuple[str, str]:
    try:
        return resolve_image_input(value)
    except ValueError as err:
        raise HTTPException(status_code=400, detail=str(err)) from err


# ============================================================
# Error mapping
# ============================================================

@app.exception_handler(ConnectorError)
async def connector_error_handler(request: Request, exc: ConnectorError):
    return JSONResponse(
        status_code=502,
        content={
            "error": "upstream_unavailable",
            "detail": str(exc),
            "upstream_status": exc.status_code,
        },
    )


@app.exception_handler(ResponseParseError)
async def parse_error_handler(request: Request, exc: ResponseParseError):
    return JSONResponse(
        status_code=502,
        content={"error": "invalid_upstream_response", "detail": str(exc)},
    )


@app.exception_handler(ResponseShapeError)
async def shape_error_handler(request: Request, exc: ResponseShapeError):
    return JSONResponse(
        status_code=502,
        content={
            "error": "upstream_schema_mismatch",
            "detail": str(exc),
            "schema": exc.schema_name,
        },
    )


def _dump(result):
    """Serialize a model (or an unvalidated dict) with wire field names."""
    if result is None:
        return None
    if hasattr(result, "to_wire"):
        return result.to_wire()
    return result


# ============================================================
# Endpoints
# ============================================================

@app.get("/health")
def health(client: CoachingClient = Depends(get_client)):
    return {
        "status": "ok",
        "analysis_model": client.analysis_model,
        "image_model": client.image_model,
    }


@app.post("/v1/scene/analyze")
async def analyze_scene(
    body: SceneAnalysisRequest,
    client: CoachingClient = Depends(get_client),
):
    image, mime_type = _image_or_400(body.image_base64)
    result = await client.analyze_scene(image, body.gender, body.style, mime_type=mime_type)
    return _dump(result)


@app.post("/v1/pose/reference")
async def generate_pose_reference(
    body: PoseReferenceRequest,
    client: CoachingClient = Depends(get_client),
):
    image = await client.generate_pose_reference(body.pose_description, body.gender, body.style)
    return {"image_base64": image}


@app.post("/v1/pose/evaluate")
async def evaluate_pose_match(
    body: PoseEvaluationRequest,
    client: CoachingClient = Depends(get_client),
):
    image, mime_type = _image_or_400(body.image_base64)
    result = await client.evaluate_pose_match(
        image, body.target_pose_description, mime_type=mime_type
    )
    return _dump(result)


@app.post("/v1/pose/landmarks")
async def extract_pose_landmarks(
    body: LandmarkRequest,
    client: CoachingClient = Depends(get_client),
):
    image, mime_type = _image_or_400(body.image_base64)
    landmarks = await client.extract_pose_landmarks(image, mime_type=mime_type)
    return {"landmarks": _dump(landmarks)}


if __name__ == "__main__":
    import uvicorn

    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    uvicorn.run("posecoach.api.http_api:app", host="0.0.0.0", port=8000)

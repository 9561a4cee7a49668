"""
Coaching Schemas

Pydantic models for the structured results returned by the coaching operations,
plus the response schemas sent to Gemini to constrain its JSON output.

Each `*_SCHEMA` dict and its pydantic model describe the same shape: the dict is
what the service is asked to produce, the model is what the client checks it
actually produced. Wire field names are camelCase; models expose snake_case
attributes with camelCase aliases.
"""

from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


# =============================================================================
# Caller-selected enumerations
# =============================================================================

class Gender(str, Enum):
    """Subject gender, interpolated verbatim into prompts."""
    FEMALE = "Female"
    MALE = "Male"
    NON_BINARY = "Non-binary"


class PoseStyle(str, Enum):
    """Photographic pose style, interpolated verbatim into prompts."""
    CASUAL = "Casual"
    PROFESSIONAL = "Professional"
    EDITORIAL = "Editorial"
    ROMANTIC = "Romantic"
    FITNESS = "Fitness"


# =============================================================================
# Response enumerations
# =============================================================================

class LightingQuality(str, Enum):
    EXCELLENT = "Excellent"
    GOOD = "Good"
    FAIR = "Fair"
    POOR = "Poor"


class ClutterLevel(str, Enum):
    CLEAN = "Clean"
    MODERATE = "Moderate"
    CLUTTERED = "Cluttered"


class Difficulty(str, Enum):
    EASY = "Easy"
    MEDIUM = "Medium"
    HARD = "Hard"


class MatchStatus(str, Enum):
    PERFECT = "Perfect"
    GOOD = "Good"
    NEEDS_IMPROVEMENT = "Needs Improvement"


class _Record(BaseModel):
    """Immutable value record with camelCase wire aliases.

    Input is accepted only under the wire (alias) names.
    """

    model_config = ConfigDict(
        frozen=True,
        use_enum_values=True,
    )

    def to_wire(self) -> dict:
        """Dump using wire field names, omitting absent optional fields."""
        return self.model_dump(by_alias=True, exclude_none=True)


# =============================================================================
# AnalysisResult
# =============================================================================

class LightingAssessment(_Record):
    quality: LightingQuality = Field(..., description="Overall light quality")
    direction: str = Field(..., description="Where the main light comes from")
    suggestion: str = Field(..., description="How to improve the light")


class BackgroundAssessment(_Record):
    clutter_level: ClutterLevel = Field(..., alias="clutterLevel")
    suggestion: str = Field(..., description="How to improve the background")


class SuggestedPose(_Record):
    title: str
    description: str
    difficulty: Difficulty
    steps: List[str] = Field(..., description="Ordered instructions to reach the pose")


class AnalysisResult(_Record):
    """
    Scene analysis and pose recommendation for one photo.

    All four sections are required.
    """
    environment: str = Field(..., description="Short description of the scene")
    lighting: LightingAssessment
    background: BackgroundAssessment
    suggested_pose: SuggestedPose = Field(..., alias="suggestedPose")


# =============================================================================
# PoseFeedback
# =============================================================================

class PoseFeedback(_Record):
    """
    How closely a photo matches a target pose.
    """
    score: int = Field(..., description="Match score (integer)")
    match_status: MatchStatus = Field(..., alias="matchStatus")
    adjustments: List[str] = Field(..., description="Ordered correction suggestions")


# =============================================================================
# PoseLandmarks
# =============================================================================

class LandmarkPoint(_Record):
    """Normalized image coordinates (0.0 to 1.0, origin top-left)."""
    x: float
    y: float


LANDMARK_NAMES = (
    "nose",
    "leftShoulder",
    "rightShoulder",
    "leftElbow",
    "rightElbow",
    "leftWrist",
    "rightWrist",
    "leftHip",
    "rightHip",
)


class PoseLandmarks(_Record):
    """
    Upper-body landmarks extracted from a photo.

    Any subset of the nine points may be absent (`None`).
    """
    nose: Optional[LandmarkPoint] = None
    left_shoulder: Optional[LandmarkPoint] = Field(None, alias="leftShoulder")
    right_shoulder: Optional[LandmarkPoint] = Field(None, alias="rightShoulder")
    left_elbow: Optional[LandmarkPoint] = Field(None, alias="leftElbow")
    right_elbow: Optional[LandmarkPoint] = Field(None, alias="rightElbow")
    left_wrist: Optional[LandmarkPoint] = Field(None, alias="leftWrist")
    right_wrist: Optional[LandmarkPoint] = Field(None, alias="rightWrist")
    left_hip: Optional[LandmarkPoint] = Field(None, alias="leftHip")
    right_hip: Optional[LandmarkPoint] = Field(None, alias="rightHip")

    def present(self) -> dict[str, LandmarkPoint]:
        """Return detected points keyed by wire name."""
        points = {}
        for name, field_info in type(self).model_fields.items():
            value = getattr(self, name)
            if value is not None:
                points[field_info.alias or name] = value
        return points


# =============================================================================
# Gemini response schemas (OpenAPI subset)
# =============================================================================

_STRING = {"type": "STRING"}

ANALYSIS_SCHEMA = {
    "type": "OBJECT",
    "properties": {
        "environment": _STRING,
        "lighting": {
            "type": "OBJECT",
            "properties": {
                "quality": {"type": "STRING", "enum": [e.value for e in LightingQuality]},
                "direction": _STRING,
                "suggestion": _STRING,
            },
            "required": ["quality", "direction", "suggestion"],
        },
        "background": {
            "type": "OBJECT",
            "properties": {
                "clutterLevel": {"type": "STRING", "enum": [e.value for e in ClutterLevel]},
                "suggestion": _STRING,
            },
            "required": ["clutterLevel", "suggestion"],
        },
        "suggestedPose": {
            "type": "OBJECT",
            "properties": {
                "title": _STRING,
                "description": _STRING,
                "difficulty": {"type": "STRING", "enum": [e.value for e in Difficulty]},
                "steps": {"type": "ARRAY", "items": _STRING},
            },
            "required": ["title", "description", "difficulty", "steps"],
        },
    },
    "required": ["environment", "lighting", "background", "suggestedPose"],
}

FEEDBACK_SCHEMA = {
    "type": "OBJECT",
    "properties": {
        "score": {"type": "INTEGER"},
        "matchStatus": {"type": "STRING", "enum": [e.value for e in MatchStatus]},
        "adjustments": {"type": "ARRAY", "items": _STRING},
    },
    "required": ["score", "matchStatus", "adjustments"],
}

LANDMARK_POINT_SCHEMA = {
    "type": "OBJECT",
    "properties": {
        "x": {"type": "NUMBER"},
        "y": {"type": "NUMBER"},
    },
    "required": ["x", "y"],
}

LANDMARKS_SCHEMA = {
    "type": "OBJECT",
    "properties": {name: LANDMARK_POINT_SCHEMA for name in LANDMARK_NAMES},
}

"""
Coaching module for posecoach.

Contains the four coaching operations (scene analysis, reference image
generation, pose scoring, landmark extraction) and the data model they return.
"""

from .schemas import (
    AnalysisResult,
    BackgroundAssessment,
    ClutterLevel,
    Difficulty,
    Gender,
    LandmarkPoint,
    LightingAssessment,
    LightingQuality,
    MatchStatus,
    PoseFeedback,
    PoseLandmarks,
    PoseStyle,
    SuggestedPose,
)
from .service import (
    CoachingClient,
    FailurePolicy,
    analyze_scene,
    evaluate_pose_match,
    extract_pose_landmarks,
    generate_pose_reference,
    get_default_client,
    set_default_client,
)

__all__ = [
    "AnalysisResult",
    "BackgroundAssessment",
    "ClutterLevel",
    "Difficulty",
    "Gender",
    "LandmarkPoint",
    "LightingAssessment",
    "LightingQuality",
    "MatchStatus",
    "PoseFeedback",
    "PoseLandmarks",
    "PoseStyle",
    "SuggestedPose",
    "CoachingClient",
    "FailurePolicy",
    "analyze_scene",
    "evaluate_pose_match",
    "extract_pose_landmarks",
    "generate_pose_reference",
    "get_default_client",
    "set_default_client",
]

"""Prompt assembly helpers used by the coaching operations.

This module is intentionally narrow: it only builds prompt strings from caller
inputs. Model selection, output schemas, transport and parsing happen outside
this module.

Design constraints:
    - Deterministic construction for identical inputs.
    - No hidden side effects (no I/O, no global state mutation).

Prompt safety model:
    - Caller values (gender, style, pose descriptions) are interpolated verbatim.
      No validation or escaping is applied; enum members contribute their value,
      anything else its `str()`.
"""

from enum import Enum


def _label(value) -> str:
    """Return the prompt text for an enum member or a raw caller value."""
    if isinstance(value, Enum):
        return str(value.value)
    return str(value)


# =========================================================
# SCENE ANALYSIS
# =========================================================
# Sent together with the scene photo; output is constrained by ANALYSIS_SCHEMA.

def build_scene_analysis_prompt(gender, style) -> str:
    """Build the photographer prompt for scene analysis and pose suggestion.

    Args:
        gender: `Gender` member or raw label.
        style: `PoseStyle` member or raw label.

    Returns:
        Prompt text.
    """
    return (
        "Act as a world-class photographer.\n"
        "Analyze the scene in this photo: the environment, the lighting "
        "(quality and direction) and how cluttered the background is.\n"
        "Then recommend a perfect Instagram-style pose for this scene, with a "
        "short title, a description, a difficulty rating and step-by-step "
        "instructions.\n"
        f"Gender: {_label(gender)}\n"
        f"Style: {_label(style)}\n"
        "Return only JSON."
    )


# =========================================================
# REFERENCE IMAGE
# =========================================================

def build_pose_reference_prompt(pose_description: str, gender, style) -> str:
    """Build the image-generation prompt for a reference pose picture."""
    return (
        "Generate a photorealistic pose reference image on a plain black background.\n"
        f"Pose: {pose_description}\n"
        f"Gender: {_label(gender)}\n"
        f"Style: {_label(style)}\n"
        "Full body, clearly lit subject. No text, no watermark."
    )


# =========================================================
# POSE EVALUATION
# =========================================================

def build_pose_evaluation_prompt(target_pose_description: str) -> str:
    """Build the prompt scoring a user's attempt against a target pose."""
    return (
        "Evaluate how accurately the person in this photo matches the target pose.\n"
        f'Target: "{target_pose_description}"\n'
        "Give an integer score from 0 to 100, a match status and a list of "
        "concrete adjustments the person should make.\n"
        "Return JSON only."
    )


# =========================================================
# LANDMARKS
# =========================================================

LANDMARK_EXTRACTION_PROMPT = (
    "Extract normalized 2D body pose landmarks (x and y between 0 and 1, origin "
    "top-left) for the person in this photo. Omit points that are not visible.\n"
    "Return JSON only."
)


def build_landmark_extraction_prompt() -> str:
    """Return the fixed landmark extraction prompt."""
    return LANDMARK_EXTRACTION_PROMPT

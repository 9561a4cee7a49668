"""posecoach API adapter package.

Architectural role:
- Defines the HTTP boundary for browser clients.
- Performs transport-level validation and response shaping.
- Delegates model work to the coaching layer.
"""

"""Prompt construction package.

Exports prompt builders used by `posecoach.coaching.service`.
"""

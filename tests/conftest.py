"""Shared fixtures for posecoach tests."""

import json

import pytest

from posecoach.coaching.service import CoachingClient, set_default_client
from posecoach.llm.client import ContentPart, GenerateContentResponse


SCENE_JSON = (
    '{"environment":"indoor studio",'
    '"lighting":{"quality":"Good","direction":"front","suggestion":"soften"},'
    '"background":{"clutterLevel":"Clean","suggestion":"none needed"},'
    '"suggestedPose":{"title":"Contrapposto","description":"weight on one leg",'
    '"difficulty":"Easy","steps":["shift weight","relax shoulders"]}}'
)

FEEDBACK = {
    "score": 82,
    "matchStatus": "Good",
    "adjustments": ["lower your left shoulder", "turn chin slightly right"],
}

LANDMARKS = {
    "nose": {"x": 0.5, "y": 0.18},
    "leftShoulder": {"x": 0.42, "y": 0.31},
    "rightShoulder": {"x": 0.58, "y": 0.3},
    "leftHip": {"x": 0.45, "y": 0.62},
}


class StubConnector:
    """Connector double: records calls, returns a canned response or raises."""

    def __init__(self, response=None, error=None):
        self.response = response
        self.error = error
        self.calls = []

    def generate_content(self, model, parts, config=None):
        self.calls.append({"model": model, "parts": list(parts), "config": config})
        if self.error is not None:
            raise self.error
        return self.response


def text_response(text: str) -> GenerateContentResponse:
    return GenerateContentResponse(parts=(ContentPart.from_text(text),))


def json_response(data) -> GenerateContentResponse:
    return text_response(json.dumps(data))


@pytest.fixture
def stub_connector():
    return StubConnector()


@pytest.fixture
def client(stub_connector):
    return CoachingClient(stub_connector, analysis_model="text-model", image_model="image-model")


@pytest.fixture(autouse=True)
def reset_default_client():
    yield
    set_default_client(None)

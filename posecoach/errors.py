"""Error types raised by the coaching client.

Every failure surfaced by `posecoach` derives from `CoachingError`, so callers that
only need a single catch point can use it. The subclasses let callers tell a
transport failure apart from a malformed model response.
"""


class CoachingError(RuntimeError):
    """Base class for all coaching client failures."""


class ConnectorError(CoachingError):
    """The generative-AI service could not be reached or rejected the request.

    Attributes:
        status_code: HTTP status returned by the service, when one was received.
    """

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class ResponseParseError(CoachingError):
    """The response body was empty or was not valid JSON."""


class ResponseShapeError(CoachingError):
    """The parsed JSON does not match the schema requested from the service.

    Attributes:
        schema_name: Name of the expected schema (for example `"PoseFeedback"`).
        errors: Validation error details as reported by pydantic.
    """

    def __init__(self, schema_name: str, errors: list | None = None):
        self.schema_name = schema_name
        self.errors = errors or []
        super().__init__(
            f"Response does not match {schema_name} schema "
            f"({len(self.errors)} validation error(s))"
        )

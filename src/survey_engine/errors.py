"""Engine exception taxonomy.

Every error the engine raises on purpose derives from ``SurveyError`` and
carries the HTTP status the server maps it to.  The message is safe to show
to the caller: it names offending fields or keys but never internal state.
"""


class SurveyError(Exception):
    """Base class for expected, caller-facing engine failures."""

    status_code = 400

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ValidationError(SurveyError):
    """Malformed or out-of-policy input."""

    status_code = 400


class PolicyViolationError(SurveyError):
    """A mutation the survey lifecycle does not allow in the current state."""

    status_code = 400


class NotFoundError(SurveyError):
    """Entity absent, or in a state that hides it from the caller."""

    status_code = 404


class UnauthorizedError(SurveyError):
    """Missing, invalid or expired credential.  Always the same message."""

    status_code = 401

    def __init__(self, message: str = "Unauthorized") -> None:
        super().__init__(message)


class MisconfigurationError(SurveyError):
    """A server-side secret the request depends on is not configured."""

    status_code = 500

class QuestionGenerationError(Exception):
    """Base class for failures raised while producing quiz questions."""


class ProviderUnavailable(QuestionGenerationError):
    """No API credential is configured, so the AI path is skipped."""


class ProviderCallFailed(QuestionGenerationError):
    """The AI provider could not be reached or answered with an error."""


class MalformedResponse(QuestionGenerationError):
    """The AI provider answered, but no usable questions could be read."""


class InvalidRequest(QuestionGenerationError, ValueError):
    """A generator was called with ``count <= 0`` or ``level < 0``."""


def check_request(level: int, count: int) -> None:
    if count <= 0:
        raise InvalidRequest(f"count must be positive, got {count}")
    if level < 0:
        raise InvalidRequest(f"level must be non-negative, got {level}")

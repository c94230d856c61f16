from typing import Optional


class ServiceError(Exception):
    """Base error raised by service-layer code.

    Carries the HTTP status the route should answer with, plus optional
    upstream details and user-facing setup instructions.
    """

    status_code = 500

    def __init__(
        self,
        message: str,
        *,
        status_code: Optional[int] = None,
        details: Optional[str] = None,
        instructions: str = "",
    ):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code
        self.details = details or message
        self.instructions = instructions


class ConfigurationError(ServiceError):
    status_code = 500


class InvalidRequestError(ServiceError):
    status_code = 400


class UpstreamServiceError(ServiceError):
    status_code = 502


class StoryGenerationError(ServiceError):
    status_code = 500


class AssemblyError(ServiceError):
    status_code = 500

"""
Error taxonomy for the self-service portal

Field validation failures are not exceptions (see selfservice.forms); everything
here propagates to the error handlers registered in main.create_app.
"""

from typing import Any, Optional


class SelfServiceError(Exception):
    """Base class for portal errors"""


class ConfigurationError(SelfServiceError):
    """Required request context is missing"""


class AlreadyCompletedError(SelfServiceError):
    """An onboarding step has already been completed for the account"""

    def __init__(self, flag: str, message: Optional[str] = None):
        self.flag = flag
        super().__init__(message or f"'{flag}' has already been provided")


class ClientError(SelfServiceError):
    """
    A call to a backend service failed.

    Carries enough of the request context to trace the failure: the service
    name, HTTP method, URL, description and correlation id.
    """

    def __init__(self, context, message: str):
        self.context = context
        super().__init__(message)

    @property
    def service(self) -> str:
        return self.context.service

    @property
    def correlation_id(self) -> Optional[str]:
        return self.context.correlation_id

    @property
    def description(self) -> str:
        return self.context.description


class TransportError(ClientError):
    """Network level failure: DNS, connection refused, timeout"""

    def __init__(self, context, cause: Exception):
        self.cause = cause
        super().__init__(
            context,
            f'Calling {context.service} to {context.description} failed: {cause}'
        )


class UnexpectedStatusError(ClientError):
    """The backend responded with a status outside the accepted set"""

    def __init__(self, context, status_code: int, body: Any = None):
        self.status_code = status_code
        self.body = body
        super().__init__(
            context,
            f'Calling {context.service} to {context.description} returned unexpected status {status_code}'
        )


class InvalidResponseError(ClientError):
    """The backend responded successfully but the body could not be read"""

    def __init__(self, context, cause: Exception, body: Any = None):
        self.cause = cause
        self.body = body
        super().__init__(
            context,
            f'Calling {context.service} to {context.description} returned an unreadable response: {cause!r}'
        )
        self.__cause__ = cause

"""
Response classification and settlement

Both transports (base_client and legacy_client) end up here, so a failed
call is classified, logged and rejected the same way whichever path made it.
"""

from concurrent.futures import Future, InvalidStateError
from typing import Any, Callable, Collection, Optional

import requests

from ..errors import ClientError, InvalidResponseError, TransportError, UnexpectedStatusError
from ..logger import get_logger
from .request_logger import (
    RequestContext,
    log_request_end,
    log_request_error,
    log_request_failure,
)

logger = get_logger(__name__)

SUCCESS_CODES = range(200, 300)
LEGACY_SUCCESS_CODES = (200, 202)


def parse_body(response: requests.Response) -> Any:
    """Parsed JSON body, the raw text when not JSON, None when empty"""
    if not response.content:
        return None
    try:
        return response.json()
    except ValueError:
        return response.text


def classify(
    context: RequestContext,
    error: Optional[Exception] = None,
    response: Optional[requests.Response] = None,
    body: Any = None,
    success_codes: Collection[int] = SUCCESS_CODES
) -> Optional[ClientError]:
    """
    Decide whether a completed call failed.

    Returns:
        None on success, otherwise the ClientError to reject with
    """
    if error is not None:
        log_request_error(context, error)
        return TransportError(context, error)

    log_request_end(context, response.status_code)
    if response.status_code not in success_codes:
        log_request_failure(context, response.status_code)
        return UnexpectedStatusError(context, response.status_code, body)
    return None


def settle(
    future: Future,
    context: RequestContext,
    error: Optional[Exception] = None,
    response: Optional[requests.Response] = None,
    body: Any = None,
    transform: Optional[Callable[[Any], Any]] = None,
    success_codes: Collection[int] = SUCCESS_CODES
) -> None:
    failure = classify(context, error, response, body, success_codes)
    if failure is not None:
        future.set_exception(failure)
        return

    try:
        result = transform(body) if transform else body
    except Exception as e:
        logger.error(
            f'Failed to transform response from {context.service}',
            extra=context.log_fields(error=repr(e))
        )
        future.set_exception(InvalidResponseError(context, e, body))
        return
    future.set_result(result)


class CallbackToFutureConverter:
    """
    Adapt a ``callback(error, response, body)`` transport to a Future.

    The future is settled by the first invocation only; any later
    invocation is logged and dropped.
    """

    def __init__(
        self,
        context: RequestContext,
        transform: Optional[Callable[[Any], Any]] = None,
        success_codes: Collection[int] = LEGACY_SUCCESS_CODES
    ):
        self.context = context
        self.transform = transform
        self.success_codes = success_codes
        self.future = Future()

    def __call__(self, error: Optional[Exception], response: Optional[requests.Response] = None, body: Any = None) -> None:
        if self.future.done():
            logger.debug(
                f'Ignoring repeated callback from {self.context.service}',
                extra=self.context.log_fields()
            )
            return
        try:
            settle(
                self.future,
                self.context,
                error=error,
                response=response,
                body=body,
                transform=self.transform,
                success_codes=self.success_codes
            )
        except InvalidStateError:
            logger.debug(
                f'Ignoring repeated callback from {self.context.service}',
                extra=self.context.log_fields()
            )

"""
Base HTTP client for backend services

Each call returns a Future that is settled with the (optionally transformed)
response body or rejected with a ClientError. No retries are attempted.
"""

from concurrent.futures import Future
from typing import Any, Callable, Collection, Dict, Optional
from urllib.parse import quote

import requests

from .request_logger import RequestContext, log_request_start
from .response_converter import SUCCESS_CODES, parse_body, settle

CORRELATION_HEADER = 'x-request-id'
DEFAULT_TIMEOUT = 60.0


def build_url(base_url: str, template: str, **params: Any) -> str:
    """
    Compose a URL from a base URL and a path template.

    Args:
        base_url: e.g. 'http://connector:9300'
        template: e.g. '/v1/api/accounts/{account_id}/stripe-setup'
        **params: Values for the template placeholders, URL-quoted

    Returns:
        Full URL
    """
    quoted = {name: quote(str(value), safe='') for name, value in params.items()}
    return base_url.rstrip('/') + template.format(**quoted)


def request_headers(correlation_id: Optional[str] = None) -> Dict[str, str]:
    headers = {
        'Accept': 'application/json',
        'Content-Type': 'application/json',
    }
    if correlation_id:
        headers[CORRELATION_HEADER] = correlation_id
    return headers


def request(
    method: str,
    url: str,
    body: Any = None,
    correlation_id: Optional[str] = None,
    description: str = '',
    service: str = '',
    transform: Optional[Callable[[Any], Any]] = None,
    timeout: float = DEFAULT_TIMEOUT,
    success_codes: Collection[int] = SUCCESS_CODES
) -> Future:
    context = RequestContext(
        method=method,
        url=url,
        service=service,
        description=description,
        correlation_id=correlation_id
    )
    future = Future()
    log_request_start(context)

    try:
        response = requests.request(
            method,
            url,
            json=body,
            headers=request_headers(correlation_id),
            timeout=timeout
        )
    except requests.RequestException as e:
        settle(future, context, error=e)
        return future

    settle(
        future,
        context,
        response=response,
        body=parse_body(response),
        transform=transform,
        success_codes=success_codes
    )
    return future


def get(url: str, **kwargs) -> Future:
    return request('GET', url, **kwargs)


def post(url: str, **kwargs) -> Future:
    return request('POST', url, **kwargs)


def put(url: str, **kwargs) -> Future:
    return request('PUT', url, **kwargs)


def patch(url: str, **kwargs) -> Future:
    return request('PATCH', url, **kwargs)


def delete(url: str, **kwargs) -> Future:
    return request('DELETE', url, **kwargs)

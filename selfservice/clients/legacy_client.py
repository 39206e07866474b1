"""
Callback style HTTP transport

Older connector operations still go through here. The callback receives
``(error, response, body)`` exactly like the transport always has; wrap it
with response_converter.CallbackToFutureConverter to get a Future.
"""

from typing import Any, Callable, Dict, Optional

import requests

from .base_client import DEFAULT_TIMEOUT, request_headers
from .response_converter import parse_body

Callback = Callable[[Optional[Exception], Optional[requests.Response], Any], None]


def _call(method: str, url: str, params: Optional[Dict[str, Any]], callback: Callback, timeout: float) -> None:
    params = params or {}
    try:
        response = requests.request(
            method,
            url,
            json=params.get('payload'),
            headers=request_headers(params.get('correlation_id')),
            timeout=timeout
        )
    except requests.RequestException as e:
        callback(e, None, None)
        return

    callback(None, response, parse_body(response))


def get(url: str, params: Optional[Dict[str, Any]], callback: Callback, timeout: float = DEFAULT_TIMEOUT) -> None:
    _call('GET', url, params, callback, timeout)


def post(url: str, params: Optional[Dict[str, Any]], callback: Callback, timeout: float = DEFAULT_TIMEOUT) -> None:
    _call('POST', url, params, callback, timeout)


def patch(url: str, params: Optional[Dict[str, Any]], callback: Callback, timeout: float = DEFAULT_TIMEOUT) -> None:
    _call('PATCH', url, params, callback, timeout)

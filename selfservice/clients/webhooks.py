"""
Webhooks API client
"""

from concurrent.futures import Future
from typing import Optional
from urllib.parse import urlencode

from ..models import Webhook
from . import base_client

SERVICE_NAME = 'webhooks'
WEBHOOKS_PATH = '/v1/webhook'


def _to_webhooks(body):
    return [Webhook.model_validate(item) for item in body or []]


class WebhooksClient:

    def __init__(self, base_url: str, timeout: float = base_client.DEFAULT_TIMEOUT):
        self.base_url = base_url
        self.timeout = timeout

    def webhooks(self, service_id: str, live: bool, correlation_id: Optional[str] = None) -> Future:
        """List the webhooks of a service for live or test mode"""
        query = urlencode({'service_id': service_id, 'live': str(live).lower()})
        return base_client.get(
            base_client.build_url(self.base_url, WEBHOOKS_PATH) + '?' + query,
            correlation_id=correlation_id,
            description='list webhooks for service',
            service=SERVICE_NAME,
            transform=_to_webhooks,
            timeout=self.timeout
        )

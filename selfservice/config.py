"""
Process-wide configuration, read once from the environment
"""

import os
import secrets
from dataclasses import dataclass
from typing import Optional

DEFAULT_REQUEST_TIMEOUT = 60.0


@dataclass(frozen=True)
class Settings:
    connector_url: str = 'http://localhost:9300'
    adminusers_url: str = 'http://localhost:9700'
    webhooks_url: str = 'http://localhost:10700'
    stripe_api_key: Optional[str] = None
    request_timeout: float = DEFAULT_REQUEST_TIMEOUT
    secret_key: str = ''
    session_type: Optional[str] = 'filesystem'
    auth0_url: Optional[str] = None
    auth0_client_id: Optional[str] = None
    auth0_client_secret: Optional[str] = None
    log_level: str = 'INFO'

    @classmethod
    def from_env(cls) -> 'Settings':
        return cls(
            connector_url=os.getenv('CONNECTOR_URL', cls.connector_url),
            adminusers_url=os.getenv('ADMINUSERS_URL', cls.adminusers_url),
            webhooks_url=os.getenv('WEBHOOKS_URL', cls.webhooks_url),
            stripe_api_key=os.getenv('STRIPE_API_KEY'),
            request_timeout=float(os.getenv('REQUEST_TIMEOUT_SECONDS', DEFAULT_REQUEST_TIMEOUT)),
            secret_key=os.getenv('FLASK_SECRET_KEY', secrets.token_hex(32)),
            session_type=os.getenv('SESSION_TYPE', 'filesystem') or None,
            auth0_url=os.getenv('AUTH0_URL'),
            auth0_client_id=os.getenv('AUTH0_CLIENT_ID'),
            auth0_client_secret=os.getenv('AUTH0_CLIENT_SECRET'),
            log_level=os.getenv('LOG_LEVEL', 'INFO'),
        )

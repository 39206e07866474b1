"""Clients for backend services and Stripe"""

from .adminusers import AdminUsersClient
from .connector import AccountSetupRequest, ConnectorClient, JsonPatchOperation
from .stripe_client import StripeClient
from .webhooks import WebhooksClient

__all__ = [
    'AccountSetupRequest',
    'AdminUsersClient',
    'ConnectorClient',
    'JsonPatchOperation',
    'StripeClient',
    'WebhooksClient',
]

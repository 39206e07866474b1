"""
Per-request context: correlation id, backend clients and the gateway account
"""

import uuid
from functools import wraps

from flask import abort, current_app, g, request, session

from .clients.base_client import CORRELATION_HEADER
from .logger import get_logger

logger = get_logger(__name__)


def assign_correlation_id():
    """before_request hook: reuse the caller's x-request-id or create one"""
    g.correlation_id = request.headers.get(CORRELATION_HEADER) or uuid.uuid4().hex


def correlation_id():
    return g.get('correlation_id')


def connector_client():
    return current_app.extensions['connector_client']


def adminusers_client():
    return current_app.extensions['adminusers_client']


def webhooks_client():
    return current_app.extensions['webhooks_client']


def stripe_client():
    return current_app.extensions['stripe_client']


def has_account_access(user: dict, gateway_account_id) -> bool:
    allowed = {str(account_id) for account_id in (user or {}).get('gateway_account_ids', [])}
    return str(gateway_account_id) in allowed


def with_gateway_account(f):
    """
    Decorator loading the gateway account named by the
    ``gateway_account_external_id`` route parameter into ``g.account``.

    Stripe accounts also get their onboarding progress attached. Backend
    failures propagate to the app error handlers.
    """
    @wraps(f)
    def decorated_function(*args, **kwargs):
        external_id = kwargs['gateway_account_external_id']
        connector = connector_client()

        account = connector.get_account_by_external_id(external_id, correlation_id()).result()

        if not has_account_access(session.get('user'), account.gateway_account_id):
            logger.info(
                f'User does not have access to gateway account {account.gateway_account_id}',
                extra={'correlation_id': correlation_id()}
            )
            abort(403)

        if account.is_stripe:
            account.stripe_setup = connector.get_stripe_account_setup(
                account.gateway_account_id, correlation_id()
            ).result()

        g.account = account
        return f(*args, **kwargs)

    return decorated_function


def has_service_access(user: dict, service) -> bool:
    return any(has_account_access(user, account_id) for account_id in service.gateway_account_ids)


def with_service(f):
    """
    Decorator loading the service named by the ``service_external_id`` route
    parameter into ``g.service``.

    The user must have access to at least one of the service's gateway
    accounts, otherwise the request is rejected with 403.
    """
    @wraps(f)
    def decorated_function(*args, **kwargs):
        service_external_id = kwargs['service_external_id']
        service = adminusers_client().get_service(service_external_id, correlation_id()).result()

        if not has_service_access(session.get('user'), service):
            logger.info(
                f'User does not have access to service {service_external_id}',
                extra={'correlation_id': correlation_id()}
            )
            abort(403)

        g.service = service
        return f(*args, **kwargs)

    return decorated_function

"""Helpers shared by the Stripe onboarding steps"""

from flask import g, redirect, url_for

from selfservice.logger import get_logger
from selfservice.middleware import connector_client, correlation_id

logger = get_logger(__name__)


def get_stripe_account_id() -> str:
    stripe_account = connector_client().get_stripe_account(
        g.account.gateway_account_id, correlation_id()
    ).result()
    return stripe_account.stripe_account_id


def complete_step(flag: str):
    """Set the step's setup flag and send the user back to the dashboard"""
    connector_client().set_stripe_account_setup_flag(
        g.account.gateway_account_id, flag, correlation_id()
    ).result()

    logger.info(
        f'Stripe setup flag {flag} set for gateway account {g.account.gateway_account_id}',
        extra={'correlation_id': correlation_id()}
    )
    return redirect(url_for('dashboard.index', gateway_account_external_id=g.account.external_id), code=303)

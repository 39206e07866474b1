"""
Setup-progress gate for the Stripe onboarding steps

Every step reads the account's progress before anything is rendered or
submitted. Missing progress is a ConfigurationError; a completed step is an
AlreadyCompletedError. Both are rendered by the app error handlers.
"""

from functools import wraps

from flask import g

from selfservice.errors import AlreadyCompletedError, ConfigurationError

SETUP_PROGRESS_MISSING = 'Stripe setup progress is not available on request'


def get_stripe_setup(account):
    progress = getattr(account, 'stripe_setup', None) if account is not None else None
    if progress is None:
        raise ConfigurationError(SETUP_PROGRESS_MISSING)
    return progress


def check_setup_progress(account, flag: str):
    """
    Args:
        account: Gateway account with ``stripe_setup`` attached
        flag: Setup flag guarding the step, e.g. 'responsible_person'

    Returns:
        The account's StripeAccountSetup

    Raises:
        ConfigurationError: progress is not available
        AlreadyCompletedError: the step is already done
    """
    progress = get_stripe_setup(account)
    if progress.is_complete(flag):
        raise AlreadyCompletedError(flag)
    return progress


def stripe_setup_step(flag: str):
    """Decorator applying check_setup_progress to ``g.account``"""
    def decorator(f):
        @wraps(f)
        def decorated_function(*args, **kwargs):
            check_setup_progress(g.get('account'), flag)
            return f(*args, **kwargs)
        return decorated_function
    return decorator

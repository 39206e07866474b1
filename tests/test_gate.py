"""
Tests for the setup-progress gate
"""

import pytest
from flask import g

from fakes import stripe_account
from selfservice.errors import AlreadyCompletedError, ConfigurationError
from selfservice.models import StripeAccountSetup
from stripe_setup.gate import SETUP_PROGRESS_MISSING, check_setup_progress, stripe_setup_step


def test_no_account():
    with pytest.raises(ConfigurationError) as excinfo:
        check_setup_progress(None, 'responsible_person')
    assert str(excinfo.value) == 'Stripe setup progress is not available on request'


def test_progress_not_attached():
    with pytest.raises(ConfigurationError, match=SETUP_PROGRESS_MISSING):
        check_setup_progress(stripe_account(), 'responsible_person')


def test_completed_step():
    account = stripe_account(stripe_setup=StripeAccountSetup(responsible_person=True))
    with pytest.raises(AlreadyCompletedError) as excinfo:
        check_setup_progress(account, 'responsible_person')
    assert excinfo.value.flag == 'responsible_person'


def test_incomplete_step_passes():
    setup = StripeAccountSetup(bank_account=True)
    account = stripe_account(stripe_setup=setup)
    assert check_setup_progress(account, 'responsible_person') is setup


def test_decorator_reads_request_account(app):
    @stripe_setup_step('vat_number')
    def view():
        return 'rendered'

    with app.test_request_context():
        g.account = stripe_account(stripe_setup=StripeAccountSetup())
        assert view() == 'rendered'

        g.account = stripe_account(stripe_setup=StripeAccountSetup(vat_number=True))
        with pytest.raises(AlreadyCompletedError):
            view()


def test_decorator_without_account(app):
    @stripe_setup_step('vat_number')
    def view():
        return 'rendered'

    with app.test_request_context():
        with pytest.raises(ConfigurationError):
            view()

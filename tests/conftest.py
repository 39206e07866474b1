import pytest
import requests
from flask import template_rendered

from fakes import (
    GATEWAY_ACCOUNT_ID,
    FakeAdminUsers,
    FakeConnector,
    FakeStripe,
    FakeWebhooks,
    HttpRecorder,
)
from main import create_app
from selfservice.config import Settings

TEST_SETTINGS = Settings(
    connector_url='http://connector',
    adminusers_url='http://adminusers',
    webhooks_url='http://webhooks',
    stripe_api_key='sk_test_123',
    secret_key='test-secret',
    session_type=None,
    auth0_url='auth.example',
    auth0_client_id='client-id',
    auth0_client_secret='client-secret',
)


@pytest.fixture
def connector():
    return FakeConnector()


@pytest.fixture
def stripe_fake():
    return FakeStripe()


@pytest.fixture
def adminusers():
    return FakeAdminUsers()


@pytest.fixture
def webhooks():
    return FakeWebhooks()


@pytest.fixture
def app(connector, stripe_fake, adminusers, webhooks):
    app = create_app(TEST_SETTINGS)
    app.config['TESTING'] = True
    app.extensions['connector_client'] = connector
    app.extensions['stripe_client'] = stripe_fake
    app.extensions['adminusers_client'] = adminusers
    app.extensions['webhooks_client'] = webhooks
    return app


@pytest.fixture
def anonymous_client(app):
    return app.test_client()


@pytest.fixture
def client(app):
    client = app.test_client()
    with client.session_transaction() as session:
        session['user'] = {
            'email': 'jane@example.org',
            'name': 'Jane Doe',
            'gateway_account_ids': [GATEWAY_ACCOUNT_ID],
        }
    return client


@pytest.fixture
def templates(app):
    """Records (template name, context) for every render"""
    recorded = []

    def record(sender, template, context, **extra):
        recorded.append((template.name, context))

    template_rendered.connect(record, app)
    yield recorded
    template_rendered.disconnect(record, app)


@pytest.fixture
def http(monkeypatch):
    recorder = HttpRecorder()
    monkeypatch.setattr(requests, 'request', recorder)
    return recorder

"""
Tests for the application factory, correlation ids and error handling
"""

import requests

from selfservice.clients.request_logger import RequestContext
from selfservice.config import Settings
from selfservice.errors import InvalidResponseError, TransportError, UnexpectedStatusError

DASHBOARD_URL = '/account/ext-123/dashboard'


def _context():
    return RequestContext(
        method='GET',
        url='http://connector/v1/api/accounts/external-id/ext-123',
        service='connector',
        description='get an account by external id',
        correlation_id='abc123'
    )


def test_healthcheck(anonymous_client):
    response = anonymous_client.get('/healthcheck')
    assert response.status_code == 200
    assert response.get_json() == {'status': 'healthy', 'service': 'selfservice'}


def test_backend_clients_registered(app):
    settings = app.extensions['settings']
    assert settings.connector_url == 'http://connector'


def test_correlation_id_taken_from_request(client, connector):
    client.get(DASHBOARD_URL, headers={'x-request-id': 'abc123'})
    assert connector.correlation_ids == ['abc123']


def test_correlation_id_generated(client, connector):
    client.get(DASHBOARD_URL)
    client.get(DASHBOARD_URL)

    first, second = connector.correlation_ids
    assert first and second
    assert first != second


def test_backend_not_found(client, connector, templates):
    connector.account_error = UnexpectedStatusError(_context(), 404, {'message': 'not found'})

    response = client.get(DASHBOARD_URL)

    assert response.status_code == 404
    assert templates[0][0] == 'error.html'
    assert templates[0][1]['message'] == 'Page not found'


def test_backend_error(client, connector, templates):
    connector.account_error = UnexpectedStatusError(_context(), 500)

    response = client.get(DASHBOARD_URL)

    assert response.status_code == 500
    assert templates[0][1]['message'] == 'There is a problem with the payments platform'


def test_backend_unreachable(client, connector):
    connector.account_error = TransportError(_context(), requests.ConnectionError('refused'))
    assert client.get(DASHBOARD_URL).status_code == 500


def test_backend_response_unreadable(client, connector, templates):
    connector.account_error = InvalidResponseError(_context(), ValueError('missing gateway_account_id'), {'unexpected': 'shape'})

    response = client.get(DASHBOARD_URL)

    assert response.status_code == 500
    assert templates[0][0] == 'error.html'
    assert templates[0][1]['message'] == 'There is a problem with the payments platform'


def test_settings_from_env(monkeypatch):
    monkeypatch.setenv('CONNECTOR_URL', 'http://connector.internal:9300')
    monkeypatch.setenv('REQUEST_TIMEOUT_SECONDS', '5')
    monkeypatch.setenv('SESSION_TYPE', '')
    monkeypatch.delenv('STRIPE_API_KEY', raising=False)

    settings = Settings.from_env()

    assert settings.connector_url == 'http://connector.internal:9300'
    assert settings.request_timeout == 5.0
    assert settings.session_type is None
    assert settings.stripe_api_key is None
    assert settings.secret_key

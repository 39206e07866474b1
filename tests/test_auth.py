"""
Tests for login, the OAuth callback and logout
"""

import pytest
from flask import redirect

import auth_routes


class FakeAuth0:
    def __init__(self, userinfo=None):
        self.userinfo = userinfo
        self.redirect_uris = []

    def authorize_redirect(self, redirect_uri):
        self.redirect_uris.append(redirect_uri)
        return redirect('https://auth.example/authorize')

    def authorize_access_token(self):
        return {'userinfo': self.userinfo} if self.userinfo else {}


@pytest.fixture
def auth0(app, monkeypatch):
    fake = FakeAuth0({
        'email': 'jane@example.org',
        'name': 'Jane Doe',
        auth_routes.GATEWAY_ACCOUNTS_CLAIM: [42],
    })
    monkeypatch.setattr(auth_routes, 'auth0', fake)
    return fake


def test_unauthenticated_user_is_sent_to_login(anonymous_client):
    response = anonymous_client.get('/account/ext-123/dashboard')

    assert response.status_code == 302
    assert response.headers['Location'].endswith('/auth/login')
    with anonymous_client.session_transaction() as session:
        assert session['next_url'].endswith('/account/ext-123/dashboard')


def test_user_without_accounts(client):
    with client.session_transaction() as session:
        session['user'] = {'email': 'jane@example.org', 'gateway_account_ids': []}

    response = client.get('/account/ext-123/dashboard')

    assert response.status_code == 302
    assert response.headers['Location'].endswith('/auth/no-access')


def test_no_access_page(anonymous_client, templates):
    assert anonymous_client.get('/auth/no-access').status_code == 403
    assert templates[0][0] == 'no_access.html'


def test_login_redirects_to_provider(anonymous_client, auth0):
    response = anonymous_client.get('/auth/login')

    assert response.status_code == 302
    assert response.headers['Location'] == 'https://auth.example/authorize'
    assert auth0.redirect_uris == ['http://localhost/auth/callback']


def test_callback_stores_user_and_returns_to_page(anonymous_client, auth0):
    with anonymous_client.session_transaction() as session:
        session['next_url'] = 'http://localhost/account/ext-123/dashboard'

    response = anonymous_client.get('/auth/callback')

    assert response.status_code == 302
    assert response.headers['Location'] == 'http://localhost/account/ext-123/dashboard'
    with anonymous_client.session_transaction() as session:
        assert session['user'] == {
            'email': 'jane@example.org',
            'name': 'Jane Doe',
            'gateway_account_ids': [42],
        }
        assert 'next_url' not in session


def test_callback_without_user_info(anonymous_client, auth0, templates):
    auth0.userinfo = None

    response = anonymous_client.get('/auth/callback')

    assert response.status_code == 400
    assert templates[0][1]['message'] == 'Failed to retrieve user information'


def test_logout(client, templates):
    response = client.get('/auth/logout')

    assert response.status_code == 200
    assert templates[0][0] == 'logged_out.html'
    with client.session_transaction() as session:
        assert 'user' not in session

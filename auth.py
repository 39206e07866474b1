"""
Auth0 (OpenID Connect) authentication for the self-service portal
"""

from functools import wraps
from flask import session, redirect, url_for, request
from authlib.integrations.flask_client import OAuth


def init_oauth(app, settings):
    """
    Initialize OAuth with the Flask app

    Args:
        app: Flask application instance
        settings: selfservice.config.Settings

    Returns:
        (OAuth instance, Auth0 client)
    """
    oauth = OAuth(app)

    auth0 = oauth.register(
        name='auth0',
        client_id=settings.auth0_client_id,
        client_secret=settings.auth0_client_secret,
        server_metadata_url=f'https://{settings.auth0_url}/.well-known/openid-configuration',
        client_kwargs={
            'scope': 'openid email profile'
        }
    )

    return oauth, auth0


def login_required(f):
    """
    Decorator to require authentication for a route
    Redirects to login if not authenticated, and to no-access if the user
    has no gateway accounts
    """
    @wraps(f)
    def decorated_function(*args, **kwargs):
        if 'user' not in session:
            # Store the original URL to redirect back after login
            session['next_url'] = request.url
            return redirect(url_for('auth.login'))

        if not session['user'].get('gateway_account_ids'):
            return redirect(url_for('auth.no_access'))

        return f(*args, **kwargs)

    return decorated_function

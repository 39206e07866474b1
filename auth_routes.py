"""
Authentication Routes
Handles login, logout, and the OAuth callback
"""

from flask import Blueprint, redirect, render_template, session, url_for

from selfservice.logger import get_logger

logger = get_logger(__name__)

# Create auth blueprint
auth_bp = Blueprint('auth', __name__, url_prefix='/auth')

# OAuth client is injected by main.create_app
auth0 = None

GATEWAY_ACCOUNTS_CLAIM = 'https://pay.example/gateway_account_ids'


def init_auth_routes(auth0_client):
    """
    Initialize auth routes with the Auth0 OAuth client

    Args:
        auth0_client: Authlib OAuth client
    """
    global auth0
    auth0 = auth0_client


@auth_bp.route('/login')
def login():
    """Redirect to Auth0"""
    redirect_uri = url_for('auth.callback', _external=True)
    return auth0.authorize_redirect(redirect_uri)


@auth_bp.route('/callback')
def callback():
    """Handle OAuth callback from Auth0"""
    token = auth0.authorize_access_token()
    user_info = token.get('userinfo')

    if not user_info:
        logger.info('Auth0 callback returned no user info')
        return render_template('error.html', message='Failed to retrieve user information'), 400

    session['user'] = {
        'email': user_info.get('email'),
        'name': user_info.get('name'),
        'gateway_account_ids': user_info.get(GATEWAY_ACCOUNTS_CLAIM, []),
    }

    # Redirect to original URL or home
    next_url = session.pop('next_url', '/')
    return redirect(next_url)


@auth_bp.route('/logout')
def logout():
    """Log out the current user"""
    session.clear()
    return render_template('logged_out.html')


@auth_bp.route('/no-access')
def no_access():
    """Show the page for users without a gateway account"""
    return render_template('no_access.html'), 403

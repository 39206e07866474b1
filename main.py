"""
Merchant self-service portal - Flask service

Onboarding (request to go live, Stripe KYC details), dashboard and webhooks
for payment service accounts.
"""

import os
from flask import Flask, g, jsonify, render_template, url_for
from flask_session import Session

from auth import init_oauth
from auth_routes import auth_bp, init_auth_routes
from dashboard import dashboard_bp
from request_to_go_live import request_to_go_live_bp
from selfservice.clients import AdminUsersClient, ConnectorClient, StripeClient, WebhooksClient
from selfservice.config import Settings
from selfservice.errors import (
    AlreadyCompletedError,
    ClientError,
    ConfigurationError,
    UnexpectedStatusError,
)
from selfservice.logger import setup_logging, get_logger
from selfservice.middleware import assign_correlation_id, correlation_id
from stripe_setup import stripe_setup_bp
from webhooks import webhooks_bp

SERVICE_NAME = 'selfservice'

logger = get_logger(SERVICE_NAME)


def register_error_handlers(app):
    """
    Central error handling. Controllers let errors propagate; every one is
    logged with the request's correlation id before a page is rendered.
    """

    @app.errorhandler(AlreadyCompletedError)
    def already_completed(error):
        logger.info(
            f'Onboarding step already completed: {error.flag}',
            extra={'correlation_id': correlation_id()}
        )
        account = g.get('account')
        link = url_for('dashboard.index', gateway_account_external_id=account.external_id) if account else '/'
        return render_template(
            'error_with_link.html',
            message="You've already provided these details",
            link=link,
            link_text='Go to the dashboard'
        )

    @app.errorhandler(ConfigurationError)
    def configuration_error(error):
        logger.error(str(error), extra={'correlation_id': correlation_id()})
        return render_template('error.html', message='There is a problem with the payments platform'), 500

    @app.errorhandler(ClientError)
    def client_error(error):
        status = getattr(error, 'status_code', None)
        logger.error(
            str(error),
            extra={
                'service': error.service,
                'description': error.description,
                'status': status,
                'correlation_id': error.correlation_id or correlation_id(),
            }
        )
        if isinstance(error, UnexpectedStatusError) and status == 404:
            return render_template('error.html', message='Page not found'), 404
        return render_template('error.html', message='There is a problem with the payments platform'), 500


def create_app(settings: Settings = None) -> Flask:
    """
    Build the Flask application.

    Args:
        settings: Configuration, read from the environment when omitted

    Returns:
        Flask application
    """
    settings = settings or Settings.from_env()
    setup_logging(SERVICE_NAME, log_level=settings.log_level)

    app = Flask(__name__)

    # Session configuration
    app.config['SECRET_KEY'] = settings.secret_key
    app.config['SESSION_COOKIE_HTTPONLY'] = True
    app.config['SESSION_COOKIE_SAMESITE'] = 'Lax'
    if settings.session_type:
        app.config['SESSION_TYPE'] = settings.session_type
        app.config['SESSION_COOKIE_SECURE'] = True  # Require HTTPS
        Session(app)

    # Backend clients, shared read-only by every request
    app.extensions['settings'] = settings
    app.extensions['connector_client'] = ConnectorClient(settings.connector_url, timeout=settings.request_timeout)
    app.extensions['adminusers_client'] = AdminUsersClient(settings.adminusers_url, timeout=settings.request_timeout)
    app.extensions['webhooks_client'] = WebhooksClient(settings.webhooks_url, timeout=settings.request_timeout)
    app.extensions['stripe_client'] = StripeClient(settings.stripe_api_key)

    # Initialize OAuth
    oauth, auth0 = init_oauth(app, settings)
    init_auth_routes(auth0)

    app.before_request(assign_correlation_id)

    # Register blueprints
    app.register_blueprint(auth_bp)
    app.register_blueprint(dashboard_bp)
    app.register_blueprint(stripe_setup_bp)
    app.register_blueprint(request_to_go_live_bp)
    app.register_blueprint(webhooks_bp)

    register_error_handlers(app)

    @app.route('/healthcheck', methods=['GET'])
    def healthcheck():
        """Health check endpoint"""
        return jsonify({'status': 'healthy', 'service': SERVICE_NAME}), 200

    return app


if __name__ == '__main__':
    create_app().run(host='0.0.0.0', port=int(os.getenv('PORT', 9400)))

"""
Webhooks routes
"""

from flask import Blueprint, abort, g, render_template

from auth import login_required
from selfservice.logger import get_logger
from selfservice.middleware import correlation_id, webhooks_client, with_gateway_account, with_service

logger = get_logger(__name__)

webhooks_bp = Blueprint('webhooks', __name__,
                        template_folder='templates',
                        url_prefix='/service/<service_external_id>/account/<gateway_account_external_id>')


@webhooks_bp.route('/webhooks', methods=['GET'])
@login_required
@with_service
@with_gateway_account
def list_webhooks(service_external_id: str, gateway_account_external_id: str):
    """List the service's webhooks for the account's mode (live or test)"""
    if str(g.account.gateway_account_id) not in g.service.gateway_account_ids:
        logger.info(
            f'Gateway account {g.account.gateway_account_id} does not belong to service {service_external_id}',
            extra={'correlation_id': correlation_id()}
        )
        abort(403)

    webhooks = webhooks_client().webhooks(service_external_id, g.account.is_live, correlation_id()).result()
    return render_template(
        'webhooks/index.html',
        account=g.account,
        service_external_id=service_external_id,
        webhooks=webhooks
    )

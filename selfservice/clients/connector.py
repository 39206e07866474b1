"""
Connector API client

Gateway account settings, refunds and Stripe onboarding progress.
"""

from concurrent.futures import Future
from dataclasses import asdict, dataclass
from types import MappingProxyType
from typing import Any, Callable, Dict, List, Mapping, Optional

from ..errors import ClientError
from ..logger import get_logger
from ..models import GatewayAccount, StripeAccount, StripeAccountSetup
from . import base_client, legacy_client
from .request_logger import RequestContext, log_request_start
from .response_converter import LEGACY_SUCCESS_CODES, CallbackToFutureConverter, classify

logger = get_logger(__name__)

SERVICE_NAME = 'connector'

ACCOUNTS_API_PATH = '/v1/api/accounts'
ACCOUNT_API_PATH = ACCOUNTS_API_PATH + '/{account_id}'
ACCOUNTS_FRONTEND_PATH = '/v1/frontend/accounts'
ACCOUNT_FRONTEND_PATH = ACCOUNTS_FRONTEND_PATH + '/{account_id}'

CONNECTOR_PATHS = MappingProxyType({
    'accounts': ACCOUNTS_API_PATH,
    'account': ACCOUNT_API_PATH,
    'account_by_external_id': ACCOUNTS_API_PATH + '/external-id/{external_id}',
    'charge_refunds': ACCOUNT_API_PATH + '/charges/{charge_id}/refunds',
    'card_types': '/v1/api/card-types',
    'stripe_setup': ACCOUNT_API_PATH + '/stripe-setup',
    'stripe_account': ACCOUNT_API_PATH + '/stripe-account',
    'notification_credentials': ACCOUNT_API_PATH + '/notification-credentials',
    'email_notification': ACCOUNT_API_PATH + '/email-notification',
    'frontend_accounts': ACCOUNTS_FRONTEND_PATH,
    'frontend_account': ACCOUNT_FRONTEND_PATH,
    'service_name': ACCOUNT_FRONTEND_PATH + '/servicename',
    'accepted_card_types': ACCOUNT_FRONTEND_PATH + '/card-types',
    'credentials': ACCOUNT_FRONTEND_PATH + '/credentials',
    'toggle_3ds': ACCOUNT_FRONTEND_PATH + '/3ds-toggle',
})

PATCH_OPERATIONS = ('replace', 'add')


@dataclass(frozen=True)
class JsonPatchOperation:
    op: str
    path: str
    value: Any

    def __post_init__(self):
        if self.op not in PATCH_OPERATIONS:
            raise ValueError(f'Unsupported patch operation: {self.op}')

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class AccountSetupRequest:
    gateway_account_id: int
    payload: Any
    correlation_id: Optional[str] = None


ErrorListener = Callable[[ClientError], None]


class ConnectorClient:
    """
    Client for the connector service.

    Args:
        base_url: Connector base URL
        paths: Path templates keyed by operation
        timeout: Request timeout in seconds
    """

    def __init__(self, base_url: str, paths: Mapping[str, str] = CONNECTOR_PATHS, timeout: float = base_client.DEFAULT_TIMEOUT):
        self.base_url = base_url
        self.paths = paths
        self.timeout = timeout
        self._error_listeners: List[ErrorListener] = []

    def _url(self, operation: str, **params) -> str:
        return base_client.build_url(self.base_url, self.paths[operation], **params)

    def _get(self, url: str, correlation_id: Optional[str], description: str, **kwargs) -> Future:
        return base_client.get(
            url,
            correlation_id=correlation_id,
            description=description,
            service=SERVICE_NAME,
            timeout=self.timeout,
            **kwargs
        )

    def _post(self, url: str, body: Any, correlation_id: Optional[str], description: str, **kwargs) -> Future:
        return base_client.post(
            url,
            body=body,
            correlation_id=correlation_id,
            description=description,
            service=SERVICE_NAME,
            timeout=self.timeout,
            **kwargs
        )

    def _patch(self, url: str, body: Any, correlation_id: Optional[str], description: str, **kwargs) -> Future:
        return base_client.patch(
            url,
            body=body,
            correlation_id=correlation_id,
            description=description,
            service=SERVICE_NAME,
            timeout=self.timeout,
            **kwargs
        )

    def _patch_account(self, gateway_account_id, operation: JsonPatchOperation, correlation_id, description) -> Future:
        return self._patch(
            self._url('account', account_id=gateway_account_id),
            operation.to_dict(),
            correlation_id,
            description
        )

    # Accounts

    def get_account(self, gateway_account_id, correlation_id: Optional[str] = None) -> Future:
        """Retrieve a gateway account (frontend view)"""
        return self._get(
            self._url('frontend_account', account_id=gateway_account_id),
            correlation_id,
            'get an account',
            transform=GatewayAccount.model_validate
        )

    def get_account_by_external_id(self, external_id: str, correlation_id: Optional[str] = None) -> Future:
        return self._get(
            self._url('account_by_external_id', external_id=external_id),
            correlation_id,
            'get an account by external id',
            transform=GatewayAccount.model_validate
        )

    def get_accounts(self, gateway_account_ids: List[int], correlation_id: Optional[str] = None) -> Future:
        url = self._url('frontend_accounts') + '?accountIds=' + ','.join(str(i) for i in gateway_account_ids)
        return self._get(url, correlation_id, 'get accounts')

    def create_gateway_account(
        self,
        payment_provider: str,
        account_type: Optional[str] = None,
        service_name: Optional[str] = None,
        analytics_id: Optional[str] = None,
        correlation_id: Optional[str] = None
    ) -> Future:
        payload = {'payment_provider': payment_provider}
        if account_type:
            payload['type'] = account_type
        if service_name:
            payload['service_name'] = service_name
        if analytics_id:
            payload['analytics_id'] = analytics_id

        return self._post(self._url('accounts'), payload, correlation_id, 'create a gateway account')

    def patch_account_credentials(self, request: AccountSetupRequest) -> Future:
        return self._patch(
            self._url('credentials', account_id=request.gateway_account_id),
            request.payload,
            request.correlation_id,
            'patch gateway account credentials'
        )

    def post_account_notification_credentials(self, request: AccountSetupRequest) -> Future:
        return self._post(
            self._url('notification_credentials', account_id=request.gateway_account_id),
            request.payload,
            request.correlation_id,
            'update notification credentials'
        )

    def get_accepted_cards_for_account(self, gateway_account_id, correlation_id: Optional[str] = None) -> Future:
        return self._get(
            self._url('accepted_card_types', account_id=gateway_account_id),
            correlation_id,
            'get accepted card types for account'
        )

    def post_accepted_cards_for_account(self, gateway_account_id, payload, correlation_id: Optional[str] = None) -> Future:
        return self._post(
            self._url('accepted_card_types', account_id=gateway_account_id),
            payload,
            correlation_id,
            'post accepted card types for account'
        )

    def post_charge_refund(self, gateway_account_id, charge_id: str, payload: Dict[str, Any], correlation_id: Optional[str] = None) -> Future:
        return self._post(
            self._url('charge_refunds', account_id=gateway_account_id, charge_id=charge_id),
            payload,
            correlation_id,
            'submit refund'
        )

    # Account settings (JSON-Patch on the account resource)

    def toggle_apple_pay(self, gateway_account_id, allow_apple_pay: bool, correlation_id: Optional[str] = None) -> Future:
        return self._patch_account(
            gateway_account_id,
            JsonPatchOperation('replace', 'allow_apple_pay', allow_apple_pay),
            correlation_id,
            'toggle allow apple pay'
        )

    def toggle_google_pay(self, gateway_account_id, allow_google_pay: bool, correlation_id: Optional[str] = None) -> Future:
        return self._patch_account(
            gateway_account_id,
            JsonPatchOperation('replace', 'allow_google_pay', allow_google_pay),
            correlation_id,
            'toggle allow google pay'
        )

    def toggle_moto_mask_card_number_input(self, gateway_account_id, is_mask_card_number: bool, correlation_id: Optional[str] = None) -> Future:
        return self._patch_account(
            gateway_account_id,
            JsonPatchOperation('replace', 'moto_mask_card_number_input', is_mask_card_number),
            correlation_id,
            'toggle gateway account card number masking setting'
        )

    def toggle_moto_mask_security_code_input(self, gateway_account_id, is_mask_security_code: bool, correlation_id: Optional[str] = None) -> Future:
        return self._patch_account(
            gateway_account_id,
            JsonPatchOperation('replace', 'moto_mask_card_security_code_input', is_mask_security_code),
            correlation_id,
            'toggle gateway account card security code masking setting'
        )

    def set_gateway_merchant_id(self, gateway_account_id, gateway_merchant_id: str, correlation_id: Optional[str] = None) -> Future:
        return self._patch_account(
            gateway_account_id,
            JsonPatchOperation('add', 'credentials/gateway_merchant_id', gateway_merchant_id),
            correlation_id,
            'set gateway merchant id'
        )

    def update_integration_version_3ds(self, gateway_account_id, integration_version_3ds: int, correlation_id: Optional[str] = None) -> Future:
        return self._patch_account(
            gateway_account_id,
            JsonPatchOperation('replace', 'integration_version_3ds', integration_version_3ds),
            correlation_id,
            'set the 3DS integration version'
        )

    # Stripe onboarding

    def get_stripe_account_setup(self, gateway_account_id, correlation_id: Optional[str] = None) -> Future:
        return self._get(
            self._url('stripe_setup', account_id=gateway_account_id),
            correlation_id,
            'get stripe account setup flags for gateway account',
            transform=StripeAccountSetup.model_validate
        )

    def set_stripe_account_setup_flag(self, gateway_account_id, flag: str, correlation_id: Optional[str] = None) -> Future:
        """
        Mark one onboarding requirement as done.

        Flags only ever go from false to true, so repeating the call is harmless.
        """
        return self._patch(
            self._url('stripe_setup', account_id=gateway_account_id),
            [JsonPatchOperation('replace', flag, True).to_dict()],
            correlation_id,
            'set stripe account setup flag to true for gateway account'
        )

    def get_stripe_account(self, gateway_account_id, correlation_id: Optional[str] = None) -> Future:
        return self._get(
            self._url('stripe_account', account_id=gateway_account_id),
            correlation_id,
            'get stripe account for gateway account',
            transform=StripeAccount.model_validate
        )

    # Legacy transport

    def _legacy(self, call, method: str, url: str, params: Dict[str, Any], description: str) -> Future:
        context = RequestContext(
            method=method,
            url=url,
            service=SERVICE_NAME,
            description=description,
            correlation_id=params.get('correlation_id')
        )
        log_request_start(context)
        converter = CallbackToFutureConverter(context)
        call(url, params, converter, timeout=self.timeout)
        return converter.future

    def get_all_card_types(self, correlation_id: Optional[str] = None) -> Future:
        return self._legacy(
            legacy_client.get,
            'GET',
            self._url('card_types'),
            {'correlation_id': correlation_id},
            'get all card types'
        )

    def patch_service_name(self, gateway_account_id, service_name: str, correlation_id: Optional[str] = None) -> Future:
        return self._legacy(
            legacy_client.patch,
            'PATCH',
            self._url('service_name', account_id=gateway_account_id),
            {'payload': {'service_name': service_name}, 'correlation_id': correlation_id},
            'update service name'
        )

    def update_3ds_enabled(self, request: AccountSetupRequest) -> Future:
        return self._legacy(
            legacy_client.patch,
            'PATCH',
            self._url('toggle_3ds', account_id=request.gateway_account_id),
            {'payload': request.payload, 'correlation_id': request.correlation_id},
            'update whether 3DS is on or off'
        )

    # Callback style operations. Failures go to the error listeners.

    def on_error(self, listener: ErrorListener) -> 'ConnectorClient':
        self._error_listeners.append(listener)
        return self

    def _publish_error(self, error: ClientError) -> None:
        if not self._error_listeners:
            raise error
        for listener in self._error_listeners:
            listener(error)

    def _response_handler(self, context: RequestContext, success_callback: Callable[[Any, Any], None]):
        def handle(error, response=None, body=None):
            failure = classify(context, error, response, body, LEGACY_SUCCESS_CODES)
            if failure is not None:
                self._publish_error(failure)
                return
            success_callback(body, response)
        return handle

    def _callback_patch(self, url: str, request: AccountSetupRequest, description: str, success_callback) -> 'ConnectorClient':
        context = RequestContext(
            method='PATCH',
            url=url,
            service=SERVICE_NAME,
            description=description,
            correlation_id=request.correlation_id
        )
        log_request_start(context)
        legacy_client.patch(
            url,
            {'payload': request.payload, 'correlation_id': request.correlation_id},
            self._response_handler(context, success_callback),
            timeout=self.timeout
        )
        return self

    def update_confirmation_email(self, request: AccountSetupRequest, success_callback) -> 'ConnectorClient':
        return self._callback_patch(
            self._url('email_notification', account_id=request.gateway_account_id),
            request,
            'update confirmation email',
            success_callback
        )

    def update_refund_email_enabled(self, request: AccountSetupRequest, success_callback) -> 'ConnectorClient':
        return self._callback_patch(
            self._url('email_notification', account_id=request.gateway_account_id),
            request,
            'update refund email enabled',
            success_callback
        )

    def update_email_collection_mode(self, request: AccountSetupRequest, success_callback) -> 'ConnectorClient':
        return self._callback_patch(
            self._url('account', account_id=request.gateway_account_id),
            request,
            'update email collection mode',
            success_callback
        )

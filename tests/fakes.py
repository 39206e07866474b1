"""
Test doubles for the backend clients, Stripe and the HTTP transport
"""

import json
from concurrent.futures import Future
from types import SimpleNamespace

from selfservice.models import GatewayAccount, Service, StripeAccount, StripeAccountSetup

GATEWAY_ACCOUNT_ID = 42
GATEWAY_ACCOUNT_EXTERNAL_ID = 'ext-123'
SERVICE_EXTERNAL_ID = 'svc-456'
STRIPE_ACCOUNT_ID = 'acct_123'


def resolved(value):
    future = Future()
    future.set_result(value)
    return future


def failed(error):
    future = Future()
    future.set_exception(error)
    return future


def stripe_account(**overrides):
    fields = {
        'gateway_account_id': GATEWAY_ACCOUNT_ID,
        'external_id': GATEWAY_ACCOUNT_EXTERNAL_ID,
        'payment_provider': 'stripe',
        'type': 'test',
        'service_name': 'My service',
        'service_id': SERVICE_EXTERNAL_ID,
    }
    fields.update(overrides)
    return GatewayAccount(**fields)


class FakeResponse:
    def __init__(self, status_code=200, json_body=None, text=None):
        self.status_code = status_code
        if json_body is not None:
            self.text = json.dumps(json_body)
        else:
            self.text = text or ''
        self.content = self.text.encode()

    def json(self):
        return json.loads(self.text)


class HttpRecorder:
    """Stands in for requests.request; replies with queued responses (200 when empty)"""

    def __init__(self):
        self.calls = []
        self.responses = []

    def respond(self, *responses):
        self.responses.extend(responses)

    def __call__(self, method, url, **kwargs):
        self.calls.append(SimpleNamespace(method=method, url=url, **kwargs))
        result = self.responses.pop(0) if self.responses else FakeResponse(200)
        if isinstance(result, Exception):
            raise result
        return result

    @property
    def last(self):
        return self.calls[-1]


class FakeConnector:
    """
    Connector double. Setting a flag is recorded but does not change the
    progress returned afterwards.
    """

    def __init__(self, account=None, setup=None, account_error=None):
        self.account = account or stripe_account()
        self.setup = setup if setup is not None else StripeAccountSetup()
        self.account_error = account_error
        self.flags_set = []
        self.correlation_ids = []

    def get_account_by_external_id(self, external_id, correlation_id=None):
        self.correlation_ids.append(correlation_id)
        if self.account_error is not None:
            return failed(self.account_error)
        return resolved(self.account.model_copy())

    def get_stripe_account_setup(self, gateway_account_id, correlation_id=None):
        return resolved(self.setup)

    def get_stripe_account(self, gateway_account_id, correlation_id=None):
        return resolved(StripeAccount(stripe_account_id=STRIPE_ACCOUNT_ID))

    def set_stripe_account_setup_flag(self, gateway_account_id, flag, correlation_id=None):
        self.flags_set.append(flag)
        return resolved(None)


class FakeStripe:
    def __init__(self):
        self.persons = []
        self.bank_accounts = []
        self.companies = []
        self.documents = []

    def create_person(self, stripe_account_id, person, correlation_id=None):
        self.persons.append((stripe_account_id, person))
        return {'id': 'person_123'}

    def update_bank_account(self, stripe_account_id, bank_account, correlation_id=None):
        self.bank_accounts.append((stripe_account_id, bank_account))
        return {'id': stripe_account_id}

    def update_company(self, stripe_account_id, company, correlation_id=None):
        self.companies.append((stripe_account_id, company))
        return {'id': stripe_account_id}

    def upload_government_entity_document(self, stripe_account_id, file, correlation_id=None):
        self.documents.append((stripe_account_id, file.read()))
        return {'id': stripe_account_id}


class FakeAdminUsers:
    def __init__(self, service=None):
        self.service = service or Service(
            external_id=SERVICE_EXTERNAL_ID,
            name='My service',
            current_go_live_stage='ENTERED_ORGANISATION_NAME',
            gateway_account_ids=[str(GATEWAY_ACCOUNT_ID)],
        )
        self.merchant_details_updates = []
        self.stage_updates = []

    def get_service(self, service_external_id, correlation_id=None):
        return resolved(self.service)

    def update_merchant_details(self, service_external_id, merchant_details, correlation_id=None):
        self.merchant_details_updates.append((service_external_id, merchant_details))
        return resolved(self.service)

    def update_current_go_live_stage(self, service_external_id, stage, correlation_id=None):
        self.stage_updates.append((service_external_id, stage))
        return resolved(self.service)


class FakeWebhooks:
    def __init__(self, webhooks=None):
        self.webhooks_list = webhooks or []
        self.calls = []

    def webhooks(self, service_id, live, correlation_id=None):
        self.calls.append((service_id, live))
        return resolved(self.webhooks_list)

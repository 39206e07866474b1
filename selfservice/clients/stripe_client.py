"""
Stripe API operations used during onboarding

Calls are made with the ``stripe`` library, passing the API key per call.
Stripe errors are mapped onto the same TransportError/UnexpectedStatusError
classification as the backend clients.
"""

from contextlib import contextmanager
from typing import Any, BinaryIO, Dict, Optional

import stripe

from ..errors import ConfigurationError, TransportError, UnexpectedStatusError
from ..models import StripeBankAccount, StripePerson
from .request_logger import RequestContext, log_request_end, log_request_error, log_request_start

SERVICE_NAME = 'stripe'


class StripeClient:

    def __init__(self, api_key: Optional[str]):
        self.api_key = api_key

    @contextmanager
    def _call(self, method: str, resource: str, description: str, correlation_id: Optional[str]):
        if not self.api_key:
            raise ConfigurationError('STRIPE_API_KEY not configured')

        context = RequestContext(
            method=method,
            url=resource,
            service=SERVICE_NAME,
            description=description,
            correlation_id=correlation_id
        )
        log_request_start(context)
        try:
            yield
        except stripe.APIConnectionError as e:
            log_request_error(context, e)
            raise TransportError(context, e) from e
        except stripe.StripeError as e:
            log_request_error(context, e)
            raise UnexpectedStatusError(context, e.http_status, e.json_body) from e
        log_request_end(context)

    def update_bank_account(self, stripe_account_id: str, bank_account: StripeBankAccount, correlation_id: Optional[str] = None) -> Any:
        with self._call('POST', f'accounts/{stripe_account_id}', 'update bank account', correlation_id):
            return stripe.Account.modify(
                stripe_account_id,
                api_key=self.api_key,
                **bank_account.basic_object()
            )

    def create_person(self, stripe_account_id: str, person: StripePerson, correlation_id: Optional[str] = None) -> Any:
        with self._call('POST', f'accounts/{stripe_account_id}/persons', 'create responsible person', correlation_id):
            return stripe.Account.create_person(
                stripe_account_id,
                api_key=self.api_key,
                **person.basic_object()
            )

    def update_company(self, stripe_account_id: str, company: Dict[str, Any], correlation_id: Optional[str] = None) -> Any:
        with self._call('POST', f'accounts/{stripe_account_id}', 'update company details', correlation_id):
            return stripe.Account.modify(
                stripe_account_id,
                api_key=self.api_key,
                company=company
            )

    def upload_government_entity_document(
        self,
        stripe_account_id: str,
        file: BinaryIO,
        correlation_id: Optional[str] = None
    ) -> Any:
        """
        Upload a verification document and attach it to the account's company.

        Args:
            stripe_account_id: Connected account id
            file: Open binary stream of the document

        Returns:
            Updated Stripe account
        """
        with self._call('POST', 'files', 'upload government entity document', correlation_id):
            uploaded = stripe.File.create(
                api_key=self.api_key,
                purpose='account_requirement',
                file=file,
                stripe_account=stripe_account_id
            )

        return self.update_company(
            stripe_account_id,
            {'verification': {'document': {'front': uploaded.id}}},
            correlation_id
        )

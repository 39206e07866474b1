"""
Tests for the dashboard and webhooks pages
"""

from fakes import stripe_account
from selfservice.models import Service, StripeAccountSetup, Webhook

DASHBOARD_URL = '/account/ext-123/dashboard'
WEBHOOKS_URL = '/service/svc-456/account/ext-123/webhooks'


class TestDashboard:
    def test_lists_incomplete_steps(self, client, connector, templates):
        connector.setup = StripeAccountSetup(bank_account=True, organisation_details=True, vat_number=True)

        assert client.get(DASHBOARD_URL).status_code == 200

        name, context = templates[0]
        assert name == 'dashboard/index.html'
        assert context['incomplete_steps'] == [
            'stripe_setup.show_responsible_person_form',
            'stripe_setup.show_company_number_form',
            'stripe_setup.show_government_entity_document_form',
        ]
        assert context['show_kyc_banner'] is False

    def test_kyc_banner(self, client, connector, templates):
        connector.account = stripe_account(requires_additional_kyc_data=True)
        connector.setup = StripeAccountSetup(responsible_person=True)

        response = client.get(DASHBOARD_URL)

        assert templates[0][1]['show_kyc_banner'] is True
        assert b'/account/ext-123/responsible-person' in response.data

    def test_no_kyc_banner_once_provided(self, client, connector, templates):
        connector.account = stripe_account(requires_additional_kyc_data=True)
        connector.setup = StripeAccountSetup(responsible_person=True, government_entity_document=True)

        client.get(DASHBOARD_URL)

        assert templates[0][1]['show_kyc_banner'] is False

    def test_non_stripe_account(self, client, connector, templates):
        connector.account = stripe_account(payment_provider='sandbox')

        client.get(DASHBOARD_URL)

        _, context = templates[0]
        assert context['incomplete_steps'] == []
        assert context['show_kyc_banner'] is False


class TestWebhooks:
    def test_lists_test_mode_webhooks(self, client, webhooks, templates):
        webhooks.webhooks_list = [Webhook(external_id='wh-1', callback_url='https://example.org/hook')]

        response = client.get(WEBHOOKS_URL)

        assert response.status_code == 200
        assert webhooks.calls == [('svc-456', False)]
        _, context = templates[0]
        assert context['webhooks'][0].external_id == 'wh-1'
        assert b'https://example.org/hook' in response.data

    def test_live_account(self, client, connector, webhooks):
        connector.account = stripe_account(type='live')
        client.get(WEBHOOKS_URL)
        assert webhooks.calls == [('svc-456', True)]

    def test_user_without_access_to_the_service(self, client, adminusers, webhooks):
        adminusers.service = Service(external_id='svc-456', gateway_account_ids=['999'])

        assert client.get(WEBHOOKS_URL).status_code == 403
        assert webhooks.calls == []

    def test_account_from_another_service(self, client, connector, webhooks):
        with client.session_transaction() as session:
            session['user'] = {'email': 'jane@example.org', 'gateway_account_ids': [42, 43]}
        connector.account = stripe_account(gateway_account_id=43)

        assert client.get(WEBHOOKS_URL).status_code == 403
        assert webhooks.calls == []

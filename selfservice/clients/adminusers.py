"""
Adminusers API client (services and go-live progress)
"""

from concurrent.futures import Future
from types import MappingProxyType
from typing import Mapping, Optional

from ..models import MerchantDetails, Service
from . import base_client
from .connector import JsonPatchOperation

SERVICE_NAME = 'adminusers'

ADMINUSERS_PATHS = MappingProxyType({
    'service': '/v1/api/services/{service_external_id}',
    'merchant_details': '/v1/api/services/{service_external_id}/merchant-details',
})


class AdminUsersClient:

    def __init__(self, base_url: str, paths: Mapping[str, str] = ADMINUSERS_PATHS, timeout: float = base_client.DEFAULT_TIMEOUT):
        self.base_url = base_url
        self.paths = paths
        self.timeout = timeout

    def _url(self, operation: str, **params) -> str:
        return base_client.build_url(self.base_url, self.paths[operation], **params)

    def get_service(self, service_external_id: str, correlation_id: Optional[str] = None) -> Future:
        return base_client.get(
            self._url('service', service_external_id=service_external_id),
            correlation_id=correlation_id,
            description='find a service',
            service=SERVICE_NAME,
            transform=Service.model_validate,
            timeout=self.timeout
        )

    def update_merchant_details(self, service_external_id: str, merchant_details: MerchantDetails, correlation_id: Optional[str] = None) -> Future:
        return base_client.put(
            self._url('merchant_details', service_external_id=service_external_id),
            body=merchant_details.model_dump(exclude_none=True),
            correlation_id=correlation_id,
            description='update merchant details',
            service=SERVICE_NAME,
            transform=Service.model_validate,
            timeout=self.timeout
        )

    def update_current_go_live_stage(self, service_external_id: str, stage: str, correlation_id: Optional[str] = None) -> Future:
        return base_client.patch(
            self._url('service', service_external_id=service_external_id),
            body=[JsonPatchOperation('replace', 'current_go_live_stage', stage).to_dict()],
            correlation_id=correlation_id,
            description='update current go live stage',
            service=SERVICE_NAME,
            transform=Service.model_validate,
            timeout=self.timeout
        )

"""
Request context and log lines shared by every outbound call
"""

import time
from dataclasses import dataclass, field
from typing import Optional

from ..logger import get_logger

logger = get_logger(__name__)


@dataclass
class RequestContext:
    method: str
    url: str
    service: str
    description: str
    correlation_id: Optional[str] = None
    start_time: float = field(default_factory=time.monotonic)

    def elapsed_ms(self) -> int:
        return int((time.monotonic() - self.start_time) * 1000)

    def log_fields(self, **extra) -> dict:
        fields = {
            'service': self.service,
            'method': self.method,
            'url': self.url,
            'description': self.description,
            'correlation_id': self.correlation_id,
        }
        fields.update(extra)
        return fields


def log_request_start(context: RequestContext) -> None:
    logger.debug(f'Calling {context.service} to {context.description}', extra=context.log_fields())


def log_request_end(context: RequestContext, status: Optional[int] = None) -> None:
    logger.info(
        f'[{context.correlation_id}] - {context.method} to {context.url} ended - elapsed time: {context.elapsed_ms()} ms',
        extra=context.log_fields(status=status, response_time=context.elapsed_ms())
    )


def log_request_failure(context: RequestContext, status: int) -> None:
    logger.info(
        f'Calling {context.service} to {context.description} failed',
        extra=context.log_fields(status=status)
    )


def log_request_error(context: RequestContext, error: Exception) -> None:
    logger.error(
        f'Calling {context.service} to {context.description} threw exception',
        extra=context.log_fields(error=repr(error))
    )

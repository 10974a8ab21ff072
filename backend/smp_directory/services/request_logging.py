"""Request Logging — attaches request context to SMP errors and logs them.

Invariants:
    - Every SMPServerError leaving the block carries operation, service group id
      and request URI in its context, and is re-raised unchanged otherwise
    - One warning per failure, with operation / service_group_id / error_code extras
"""

import logging
from contextlib import contextmanager
from typing import Iterator

from smp_directory.core.errors import ErrorContext, SMPServerError

logger = logging.getLogger(__name__)


@contextmanager
def logged_failures(
    log_prefix: str,
    operation: str,
    service_group_id: str,
    request_uri: str | None = None,
) -> Iterator[None]:
    try:
        yield
    except SMPServerError as e:
        e.context = ErrorContext(
            timestamp=e.context.timestamp,
            operation=operation,
            service_group_id=service_group_id,
            request_uri=request_uri,
            debug_info=e.context.debug_info,
        )
        logger.warning(
            f"{log_prefix}{operation}({service_group_id}) failed: {e.message}",
            extra={
                "operation": operation,
                "service_group_id": service_group_id,
                "error_code": e.code,
            },
        )
        raise

"""X-Request-ID handling.

Every response carries an X-Request-ID. A client-supplied id is reused, cut
down to MAX_REQUEST_ID_LENGTH so it cannot bloat log lines; otherwise a
UUID4 is generated. The id reaches log lines through
goalboard.core.logging.add_correlation_id.
"""

import uuid

from asgi_correlation_id import CorrelationIdMiddleware
from fastapi import FastAPI

REQUEST_ID_HEADER = "X-Request-ID"
MAX_REQUEST_ID_LENGTH = 64


def normalize_request_id(value: str) -> str:
    return value.strip()[:MAX_REQUEST_ID_LENGTH]


def is_usable_request_id(value: str) -> bool:
    """Blank ids are replaced by a generated one."""
    return bool(value.strip())


def setup_correlation_middleware(app: FastAPI) -> None:
    app.add_middleware(
        CorrelationIdMiddleware,
        header_name=REQUEST_ID_HEADER,
        generator=lambda: str(uuid.uuid4()),
        validator=is_usable_request_id,
        transformer=normalize_request_id,
    )


__all__ = ["setup_correlation_middleware", "normalize_request_id", "REQUEST_ID_HEADER"]

# Transaction ID Middleware
"""Transaction id tracking across the unroller and the content store."""

import logging
import secrets
import string
from contextvars import ContextVar
from typing import Optional

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware

logger = logging.getLogger("content_unroller.middleware.transaction")

TRANSACTION_ID_HEADER = "X-Request-Id"

_TID_ALPHABET = string.ascii_letters + string.digits

# Context variable to store transaction ID
_transaction_id: ContextVar[Optional[str]] = ContextVar("transaction_id", default=None)


def get_transaction_id() -> Optional[str]:
    """Get the current transaction ID from context."""
    return _transaction_id.get()


def set_transaction_id(transaction_id: str) -> None:
    """Set the transaction ID in context."""
    _transaction_id.set(transaction_id)


def new_transaction_id() -> str:
    """Generate a transaction id of the form ``tid_`` plus 10 random characters."""
    return "tid_" + "".join(secrets.choice(_TID_ALPHABET) for _ in range(10))


class TransactionIDMiddleware(BaseHTTPMiddleware):
    """Middleware to extract or generate the transaction ID."""

    async def dispatch(self, request: Request, call_next):
        transaction_id = request.headers.get(TRANSACTION_ID_HEADER)
        if not transaction_id:
            transaction_id = new_transaction_id()

        set_transaction_id(transaction_id)
        request.state.transaction_id = transaction_id

        logger.debug(f"[{transaction_id}] {request.method} {request.url.path}")

        response = await call_next(request)
        response.headers[TRANSACTION_ID_HEADER] = transaction_id
        return response

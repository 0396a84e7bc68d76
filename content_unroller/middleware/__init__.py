# Content Unroller Middleware
"""Request middleware for transaction id tracking."""

from .transaction import TransactionIDMiddleware, get_transaction_id

__all__ = [
    "TransactionIDMiddleware",
    "get_transaction_id",
]

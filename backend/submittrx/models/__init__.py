"""
Wire models for SubmitTrx.
"""
from .transactions import LineItem, TransactionRequest, SuccessResponse, FailedResponse

__all__ = [
    "LineItem",
    "TransactionRequest",
    "SuccessResponse",
    "FailedResponse",
]

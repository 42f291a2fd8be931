"""
SubmitTrx Error Hierarchy

One error per rejection reason of the transaction validation pipeline.
Each carries the HTTP status class and the partner-facing result message.

The validation core returns these as values; only the HTTP layer raises them.
"""
from typing import Optional, Dict, Any


class SubmitTrxError(Exception):
    """
    Base exception for all transaction rejections.

    Every rejection is a caller-input error: it maps to either a 400 or a 401
    response and is never retried.
    """

    status_code = 400

    def __init__(
        self,
        error_code: str,
        message: str,
        details: Optional[Dict[str, Any]] = None
    ):
        self.error_code = error_code
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to the partner-facing failure body."""
        return {
            "result": 0,
            "resultmessage": self.message
        }


class MalformedRequestError(SubmitTrxError):
    """Request body absent, null or not decodable."""

    def __init__(self, details: Optional[Dict[str, Any]] = None):
        super().__init__("malformed_request", "Invalid request.", details)


class MissingFieldError(SubmitTrxError):
    """
    A required field is absent or empty.

    Example:
    - partnerrefno is "" -> "partnerrefno is required."
    """

    def __init__(self, field: str):
        self.field = field
        super().__init__("missing_field", f"{field} is required.", {"field": field})


class InvalidAmountError(SubmitTrxError):
    """Declared total amount is negative."""

    def __init__(self, details: Optional[Dict[str, Any]] = None):
        super().__init__("invalid_amount", "Total Amount must be positive value.", details)


class AccessDeniedError(SubmitTrxError):
    """
    Partner authentication failed.

    Examples:
    - Unknown partnerkey
    - Decoded partnerpassword does not match the registered secret
    - partnerpassword is not valid Base64
    """

    status_code = 401

    def __init__(self, details: Optional[Dict[str, Any]] = None):
        super().__init__("access_denied", "Access Denied!", details)


class ExpiredError(SubmitTrxError):
    """
    Request timestamp rejected.

    Examples:
    - Timestamp does not match yyyy-MM-ddTHH:mm:ss.fffffffZ
    - Timestamp more than the tolerance away from server time (either direction)
    """

    status_code = 401

    def __init__(self, details: Optional[Dict[str, Any]] = None):
        super().__init__("expired", "Expired.", details)


class SignatureInvalidError(SubmitTrxError):
    """Recomputed signature does not match the supplied sig."""

    status_code = 401

    def __init__(self, details: Optional[Dict[str, Any]] = None):
        super().__init__("invalid_signature", "Invalid Signature.", details)


class AmountMismatchError(SubmitTrxError):
    """Declared total amount differs from the sum of the line items."""

    def __init__(self, details: Optional[Dict[str, Any]] = None):
        super().__init__("amount_mismatch", "Invalid Total Amount.", details)

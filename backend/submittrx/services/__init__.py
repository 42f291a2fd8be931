"""
Validation, signing and pricing services for SubmitTrx.
"""
from .discount_service import calculate_discount, discount_breakdown, is_prime
from .partner_registry import PartnerRegistry
from .signature_service import generate_signature, sign_request, verify_signature
from .timestamp_service import TimestampValidator, format_timestamp, parse_timestamp
from .validation_service import RequestValidator, ValidationOutcome

__all__ = [
    "calculate_discount",
    "discount_breakdown",
    "is_prime",
    "PartnerRegistry",
    "generate_signature",
    "sign_request",
    "verify_signature",
    "TimestampValidator",
    "format_timestamp",
    "parse_timestamp",
    "RequestValidator",
    "ValidationOutcome",
]

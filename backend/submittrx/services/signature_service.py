"""
Signature Service for Partner Transaction Requests

Implements signature generation and verification for partner requests.

Signature scheme (must be reproduced bit-exactly by partners):
1. payload = yyyyMMddHHmmss(timestamp) + partnerkey + partnerrefno
             + str(totalamount) + partnerpassword (Base64, as supplied)
2. digest  = SHA-256 over the UTF-8 payload, rendered as lowercase hex
3. sig     = Base64 of the UTF-8 bytes of that hex string
"""
import base64
import hashlib
import hmac
from typing import Optional
import logging

from ..models.transactions import TransactionRequest
from .timestamp_service import parse_timestamp, format_signing_timestamp

logger = logging.getLogger(__name__)


def build_signature_payload(
    timestamp: str,
    partnerkey: str,
    partnerrefno: str,
    totalamount: int,
    partnerpassword: str
) -> Optional[str]:
    """
    Create the canonical string that is signed.

    Fields are concatenated without delimiters. The timestamp is reparsed
    and rendered as yyyyMMddHHmmss; the password is used as supplied,
    still Base64-encoded.

    Returns:
        Canonical payload, or None if the timestamp cannot be parsed
    """
    parsed = parse_timestamp(timestamp)
    if parsed is None:
        return None

    return (
        f"{format_signing_timestamp(parsed)}"
        f"{partnerkey}"
        f"{partnerrefno}"
        f"{int(totalamount)}"
        f"{partnerpassword}"
    )


def compute_payload_digest(payload: str) -> str:
    """SHA-256 of the UTF-8 payload as 64 lowercase hex characters."""
    return hashlib.sha256(payload.encode('utf-8')).hexdigest()


def generate_signature(payload: str) -> str:
    """
    Sign a canonical payload.

    The hex digest string (not the raw digest bytes) is Base64-encoded.
    """
    hex_digest = compute_payload_digest(payload)
    return base64.b64encode(hex_digest.encode('utf-8')).decode('ascii')


def sign_request(request: TransactionRequest) -> Optional[str]:
    """
    Compute the expected signature for a transaction request.

    Returns:
        Base64 signature, or None if the timestamp cannot be parsed
    """
    payload = build_signature_payload(
        request.timestamp,
        request.partnerkey,
        request.partnerrefno,
        request.totalamount,
        request.partnerpassword
    )
    if payload is None:
        return None

    return generate_signature(payload)


def verify_signature(request: TransactionRequest) -> bool:
    """
    Verify the supplied sig against a recomputed signature.

    Comparison is exact (case-sensitive, no trimming) and constant-time.
    An unparseable timestamp counts as a verification failure.

    Returns:
        True if signature valid, False otherwise
    """
    expected = sign_request(request)
    if expected is None or request.sig is None:
        logger.debug(f"Cannot verify signature for partner {request.partnerkey}: bad timestamp or sig")
        return False

    # Compare bytes: compare_digest rejects non-ASCII str arguments
    return hmac.compare_digest(
        expected.encode('utf-8'),
        request.sig.encode('utf-8')
    )


def encode_partner_password(secret: str) -> str:
    """Base64-encode a plaintext partner secret as partners send it."""
    return base64.b64encode(secret.encode('utf-8')).decode('ascii')

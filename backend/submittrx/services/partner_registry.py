"""
Partner Registry

Read-only lookup of partner shared secrets, built once at startup from
configuration and injected into the request validator.
"""
import base64
import binascii
import hmac
from types import MappingProxyType
from typing import Mapping, Optional
import logging

logger = logging.getLogger(__name__)


def decode_partner_password(encoded: str) -> Optional[str]:
    """
    Decode a Base64 partner password to its UTF-8 plaintext.

    Returns:
        Decoded secret, or None if the value is not valid Base64 or not UTF-8
    """
    try:
        return base64.b64decode(encoded, validate=True).decode('utf-8')
    except (binascii.Error, UnicodeDecodeError, ValueError):
        return None


class PartnerRegistry:
    """
    Immutable partnerkey -> secret table.

    Keys are case-sensitive. The table is copied on construction so later
    changes to the source mapping are not observed.
    """

    def __init__(self, partners: Mapping[str, str]):
        self._partners = MappingProxyType(dict(partners))

    def __len__(self) -> int:
        return len(self._partners)

    def get_secret(self, partnerkey: str) -> Optional[str]:
        """Return the registered secret for a partner, or None if unknown."""
        return self._partners.get(partnerkey)

    def authenticate(self, partnerkey: str, encoded_password: str) -> bool:
        """
        Check a partner's Base64 password against the registered secret.

        Args:
            partnerkey: Partner identifier (case-sensitive)
            encoded_password: Base64-encoded secret as supplied by the partner

        Returns:
            True only if the partner exists and the decoded password equals
            the registered secret exactly
        """
        secret = self.get_secret(partnerkey)
        if secret is None:
            logger.debug(f"Unknown partner: {partnerkey}")
            return False

        decoded = decode_partner_password(encoded_password)
        if decoded is None:
            logger.debug(f"Undecodable password for partner: {partnerkey}")
            return False

        return hmac.compare_digest(decoded.encode('utf-8'), secret.encode('utf-8'))

from submittrx.models.transactions import TransactionRequest
from submittrx.services.signature_service import (
    build_signature_payload,
    compute_payload_digest,
    encode_partner_password,
    generate_signature,
    sign_request,
    verify_signature,
)

from conftest import GOOGLE_PASSWORD, make_request

# Cross-implementation test vector
GOLDEN_TIMESTAMP = "2024-01-01T00:00:00.0000000Z"
GOLDEN_PAYLOAD = "20240101000000FAKEGOOGLEREF11000RkFLRVBBU1NXT1JEMTIzNA=="
GOLDEN_DIGEST = "e0139202e7aeed93ed7904135c99878576f598e3e6c78b39247fe845ace0e408"
GOLDEN_SIGNATURE = "ZTAxMzkyMDJlN2FlZWQ5M2VkNzkwNDEzNWM5OTg3ODU3NmY1OThlM2U2Yzc4YjM5MjQ3ZmU4NDVhY2UwZTQwOA=="


def golden_request(**overrides) -> TransactionRequest:
    fields = {
        "partnerkey": "FAKEGOOGLE",
        "partnerrefno": "REF1",
        "partnerpassword": GOOGLE_PASSWORD,
        "timestamp": GOLDEN_TIMESTAMP,
        "totalamount": 1000,
        "sig": GOLDEN_SIGNATURE,
    }
    fields.update(overrides)
    return TransactionRequest(**fields)


def test_encode_partner_password():
    assert encode_partner_password("FAKEPASSWORD1234") == GOOGLE_PASSWORD


def test_golden_payload():
    payload = build_signature_payload(GOLDEN_TIMESTAMP, "FAKEGOOGLE", "REF1", 1000, GOOGLE_PASSWORD)

    assert payload == GOLDEN_PAYLOAD


def test_golden_digest_is_lowercase_hex():
    digest = compute_payload_digest(GOLDEN_PAYLOAD)

    assert digest == GOLDEN_DIGEST
    assert len(digest) == 64


def test_golden_signature():
    assert generate_signature(GOLDEN_PAYLOAD) == GOLDEN_SIGNATURE
    assert sign_request(golden_request()) == GOLDEN_SIGNATURE


def test_signature_encodes_hex_text_not_raw_digest():
    # Base64 of 64 ASCII hex characters is 88 characters long; raw digest would be 44
    assert len(GOLDEN_SIGNATURE) == 88


def test_payload_drops_fractional_seconds():
    payload = build_signature_payload("2024-01-01T00:00:00.9999999Z", "FAKEGOOGLE", "REF1", 1000, GOOGLE_PASSWORD)

    assert payload == GOLDEN_PAYLOAD


def test_payload_with_unparseable_timestamp():
    assert build_signature_payload("2024-01-01T00:00:00Z", "FAKEGOOGLE", "REF1", 1000, GOOGLE_PASSWORD) is None
    assert sign_request(golden_request(timestamp="2024-01-01")) is None


def test_verify_golden_request():
    assert verify_signature(golden_request())


def test_verify_is_case_sensitive():
    assert not verify_signature(golden_request(sig=GOLDEN_SIGNATURE.lower()))


def test_verify_does_not_trim():
    assert not verify_signature(golden_request(sig=GOLDEN_SIGNATURE + " "))


def test_verify_rejects_non_ascii_sig():
    assert not verify_signature(golden_request(sig="ü" + GOLDEN_SIGNATURE[1:]))


def test_verify_detects_tampered_fields():
    assert not verify_signature(golden_request(totalamount=1001))
    assert not verify_signature(golden_request(partnerrefno="REF2"))
    assert not verify_signature(golden_request(timestamp="2024-01-01T00:00:01.0000000Z"))


def test_verify_fails_on_unparseable_timestamp():
    assert not verify_signature(golden_request(timestamp="2024-01-01T00:00:00.000Z"))


def test_make_request_is_signed():
    assert verify_signature(make_request())

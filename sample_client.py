#!/usr/bin/env python3
"""
Sample partner client for the transaction submission endpoint.

Builds a freshly timestamped, signed request for a demo partner and
posts it to a running server.

Usage:
    python sample_client.py FAKEGOOGLE FAKEPASSWORD1234 "2x500" "4x250"
"""
import requests
import sys
import json
import uuid
from datetime import datetime, timezone

from submittrx.services.signature_service import encode_partner_password, generate_signature, build_signature_payload
from submittrx.services.timestamp_service import format_timestamp


def build_request(partnerkey: str, secret: str, items: list) -> dict:
    """Build a signed request body for the given items."""
    timestamp = format_timestamp(datetime.now(timezone.utc))
    partnerrefno = f"REF-{uuid.uuid4().hex[:12]}"
    partnerpassword = encode_partner_password(secret)
    totalamount = sum(item["qty"] * item["unitprice"] for item in items)

    payload = build_signature_payload(timestamp, partnerkey, partnerrefno, totalamount, partnerpassword)

    return {
        "partnerkey": partnerkey,
        "partnerrefno": partnerrefno,
        "partnerpassword": partnerpassword,
        "timestamp": timestamp,
        "totalamount": totalamount,
        "items": items,
        "sig": generate_signature(payload),
    }


def parse_item(text: str) -> dict:
    """Parse "QTYxUNITPRICE" (unit price in cents)."""
    qty, unitprice = text.lower().split("x", 1)
    return {"qty": int(qty), "unitprice": int(unitprice)}


def submit(body: dict, url: str = "http://localhost:8000/api/submittrxmessage"):
    """Post a request and print the response."""
    print(f"📨 Submitting {body['partnerrefno']} for {body['partnerkey']}")
    print(f"🔗 Connecting to: {url}")
    print("=" * 70)

    try:
        response = requests.post(url, json=body, timeout=10)

        print(f"HTTP {response.status_code}")
        print(json.dumps(response.json(), indent=2))

    except requests.exceptions.Timeout:
        print("❌ Timeout - server took too long to respond")
    except requests.exceptions.ConnectionError:
        print("❌ Connection error - is the server running?")
    except ValueError:
        print(f"❌ Non-JSON response: {response.text}")


if __name__ == "__main__":
    if len(sys.argv) < 3:
        print("Usage: python sample_client.py PARTNERKEY SECRET [QTYxUNITPRICE ...]")
        print("\nExample:")
        print('  python sample_client.py FAKEGOOGLE FAKEPASSWORD1234 "2x500" "4x250"')
        sys.exit(1)

    items = [parse_item(text) for text in sys.argv[3:]]
    submit(build_request(sys.argv[1], sys.argv[2], items))

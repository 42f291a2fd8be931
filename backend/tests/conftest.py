from datetime import datetime, timedelta, timezone
from typing import Any, Dict, List, Optional

import pytest

from submittrx.models.transactions import TransactionRequest
from submittrx.services.partner_registry import PartnerRegistry
from submittrx.services.signature_service import sign_request
from submittrx.services.timestamp_service import format_timestamp
from submittrx.services.validation_service import RequestValidator

NOW = datetime(2024, 1, 1, 0, 0, 0, tzinfo=timezone.utc)

PARTNERS = {
    "FAKEGOOGLE": "FAKEPASSWORD1234",
    "FAKEPEOPLE": "FAKEPASSWORD4578",
}

# Base64 of FAKEPASSWORD1234
GOOGLE_PASSWORD = "RkFLRVBBU1NXT1JEMTIzNA=="


def make_request(
    items: Optional[List[Dict[str, int]]] = None,
    sign: bool = True,
    **overrides: Any
) -> TransactionRequest:
    """Valid signed request at NOW, with any field overridden before signing."""
    if items is None:
        items = [{"qty": 10, "unitprice": 100}]

    fields: Dict[str, Any] = {
        "partnerkey": "FAKEGOOGLE",
        "partnerrefno": "REF1",
        "partnerpassword": GOOGLE_PASSWORD,
        "timestamp": format_timestamp(NOW),
        "totalamount": sum(i["qty"] * i["unitprice"] for i in items),
        "items": items,
    }
    fields.update({k: v for k, v in overrides.items() if k != "sig"})

    request = TransactionRequest(**fields)
    if "sig" in overrides:
        return request.model_copy(update={"sig": overrides["sig"]})
    if sign:
        return request.model_copy(update={"sig": sign_request(request)})
    return request


@pytest.fixture
def registry() -> PartnerRegistry:
    return PartnerRegistry(PARTNERS)


@pytest.fixture
def validator(registry) -> RequestValidator:
    return RequestValidator(registry, tolerance=timedelta(minutes=5), clock=lambda: NOW)

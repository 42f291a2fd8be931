"""
Pydantic Transaction Models

Wire models for the partner transaction submission endpoint.
All monetary values are integers in minor currency units (cents).
"""
from typing import Annotated, List, Literal, Optional
from pydantic import BaseModel, Field

# Signed 64-bit range; larger values are rejected at decoding
Int64 = Annotated[int, Field(ge=-(2**63), le=2**63 - 1)]


class LineItem(BaseModel):
    """Single line of a partner transaction."""
    qty: Int64
    unitprice: Int64

    @property
    def line_total(self) -> int:
        return self.qty * self.unitprice


class TransactionRequest(BaseModel):
    """
    Partner transaction request as received on the wire.

    Every field is optional at the decoding stage: presence of required
    fields is checked by the validation pipeline so that the partner gets
    a "<field> is required." message naming the first missing field.
    """
    partnerkey: Optional[str] = None
    partnerrefno: Optional[str] = None
    partnerpassword: Optional[str] = Field(
        None,
        description="Base64-encoded partner secret"
    )
    timestamp: Optional[str] = Field(
        None,
        description="UTC timestamp in yyyy-MM-ddTHH:mm:ss.fffffffZ format"
    )
    totalamount: Optional[Int64] = Field(
        None,
        description="Declared total in cents, must equal the sum of the items"
    )
    items: Optional[List[LineItem]] = None
    sig: Optional[str] = Field(
        None,
        description="Base64 of the lowercase hex SHA-256 of the canonical payload"
    )

    model_config = {
        "frozen": True,
        "json_schema_extra": {
            "example": {
                "partnerkey": "FAKEGOOGLE",
                "partnerrefno": "REF1",
                "partnerpassword": "RkFLRVBBU1NXT1JEMTIzNA==",
                "timestamp": "2024-01-01T00:00:00.0000000Z",
                "totalamount": 1000,
                "items": [
                    {"qty": 10, "unitprice": 100}
                ],
                "sig": "ZTAxMzkyMDJlN2FlZWQ5M2VkNzkwNDEzNWM5OTg3ODU3NmY1OThlM2U2Yzc4YjM5MjQ3ZmU4NDVhY2UwZTQwOA=="
            }
        }
    }

    def items_total(self) -> int:
        """Sum of qty * unitprice over the items, 0 when there are none."""
        return sum(item.line_total for item in self.items or [])


class SuccessResponse(BaseModel):
    """Accepted transaction with its computed discount."""
    result: Literal[1] = 1
    totalamount: int
    totaldiscount: int = Field(ge=0)
    finalamount: int


class FailedResponse(BaseModel):
    """Rejected transaction."""
    result: Literal[0] = 0
    resultmessage: str

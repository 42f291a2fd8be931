"""
Transaction Validation Service

Runs the partner request checks in a fixed order and stops at the first
failure. Each check is a plain function returning None on success or the
SubmitTrxError describing the rejection; nothing is raised.

Check order:
1. Request present
2. Required fields: partnerkey, partnerrefno, partnerpassword, timestamp,
   totalamount, sig
3. totalamount >= 0
4. Partner authentication
5. Timestamp freshness
6. Signature
7. totalamount == sum(qty * unitprice)

On success the discount is computed and the final amount returned.
"""
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Callable, List, Optional
import logging

from ..config import settings
from ..exceptions import (
    SubmitTrxError,
    MalformedRequestError,
    MissingFieldError,
    InvalidAmountError,
    AccessDeniedError,
    ExpiredError,
    SignatureInvalidError,
    AmountMismatchError,
)
from ..models.transactions import TransactionRequest, SuccessResponse
from .discount_service import discount_breakdown
from .partner_registry import PartnerRegistry
from .signature_service import verify_signature
from .timestamp_service import DEFAULT_TOLERANCE, TimestampValidator, utc_now

logger = logging.getLogger(__name__)

REQUIRED_STRING_FIELDS_BEFORE_AMOUNT = ("partnerkey", "partnerrefno", "partnerpassword", "timestamp")
REQUIRED_STRING_FIELDS_AFTER_AMOUNT = ("sig",)


@dataclass(frozen=True)
class ValidationOutcome:
    """Exactly one of error / success is set."""
    error: Optional[SubmitTrxError] = None
    success: Optional[SuccessResponse] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def failed(cls, error: SubmitTrxError) -> "ValidationOutcome":
        return cls(error=error)

    @classmethod
    def accepted(cls, success: SuccessResponse) -> "ValidationOutcome":
        return cls(success=success)


# ============================================================================
# Individual Checks
# ============================================================================

def check_required_fields(request: TransactionRequest) -> Optional[SubmitTrxError]:
    """First absent or empty required field; totalamount is missing only if None."""
    for field in REQUIRED_STRING_FIELDS_BEFORE_AMOUNT:
        if not getattr(request, field):
            return MissingFieldError(field)

    if request.totalamount is None:
        return MissingFieldError("totalamount")

    for field in REQUIRED_STRING_FIELDS_AFTER_AMOUNT:
        if not getattr(request, field):
            return MissingFieldError(field)

    return None


def check_amount(request: TransactionRequest) -> Optional[SubmitTrxError]:
    if request.totalamount < 0:
        return InvalidAmountError({"totalamount": request.totalamount})
    return None


def check_items_total(request: TransactionRequest) -> Optional[SubmitTrxError]:
    items_total = request.items_total()
    if request.totalamount != items_total:
        return AmountMismatchError({
            "totalamount": request.totalamount,
            "items_total": items_total
        })
    return None


# ============================================================================
# Request Validator
# ============================================================================

class RequestValidator:
    """
    Validates partner transaction requests.

    Holds no mutable state: the registry is read-only and the clock is only
    read, so one instance can serve concurrent requests.
    """

    def __init__(
        self,
        registry: PartnerRegistry,
        tolerance: timedelta = DEFAULT_TOLERANCE,
        clock: Callable[[], datetime] = utc_now
    ):
        self.registry = registry
        self.timestamps = TimestampValidator(tolerance=tolerance, clock=clock)

    def check_partner(self, request: TransactionRequest) -> Optional[SubmitTrxError]:
        if not self.registry.authenticate(request.partnerkey, request.partnerpassword):
            return AccessDeniedError({"partnerkey": request.partnerkey})
        return None

    def check_timestamp(self, request: TransactionRequest) -> Optional[SubmitTrxError]:
        if not self.timestamps.is_fresh(request.timestamp):
            return ExpiredError({"timestamp": request.timestamp})
        return None

    def check_signature(self, request: TransactionRequest) -> Optional[SubmitTrxError]:
        if not verify_signature(request):
            return SignatureInvalidError({"partnerkey": request.partnerkey})
        return None

    def checks(self) -> List[Callable[[TransactionRequest], Optional[SubmitTrxError]]]:
        return [
            check_required_fields,
            check_amount,
            self.check_partner,
            self.check_timestamp,
            self.check_signature,
            check_items_total,
        ]

    def validate(self, request: Optional[TransactionRequest]) -> ValidationOutcome:
        """
        Validate a request and price it.

        Args:
            request: Decoded request, or None if the body was absent

        Returns:
            ValidationOutcome with the first failure, or the success record
        """
        if request is None:
            logger.warning("Rejected transaction: malformed_request (no body)")
            return ValidationOutcome.failed(MalformedRequestError())

        for check in self.checks():
            error = check(request)
            if error is not None:
                logger.warning(
                    f"Rejected transaction: {error.error_code}, "
                    f"partnerkey={request.partnerkey}, partnerrefno={request.partnerrefno}"
                )
                return ValidationOutcome.failed(error)

        breakdown = discount_breakdown(request.totalamount)
        logger.debug(f"Discount breakdown for {request.partnerrefno}: {breakdown.model_dump()}")

        success = SuccessResponse(
            totalamount=request.totalamount,
            totaldiscount=breakdown.discount,
            finalamount=request.totalamount - breakdown.discount,
        )

        logger.info(
            f"Accepted transaction: partnerkey={request.partnerkey}, "
            f"partnerrefno={request.partnerrefno}, total={success.totalamount}, "
            f"discount={success.totaldiscount}, final={success.finalamount}"
        )

        return ValidationOutcome.accepted(success)


# Global validator instance
_request_validator: Optional[RequestValidator] = None


def get_request_validator() -> RequestValidator:
    """
    Get or create the global request validator.

    The partner registry is built from settings on first use.

    Returns:
        RequestValidator singleton
    """
    global _request_validator
    if _request_validator is None:
        _request_validator = RequestValidator(
            registry=PartnerRegistry(settings.partners),
            tolerance=timedelta(seconds=settings.timestamp_tolerance_seconds),
        )
    return _request_validator

"""
Transactions API Endpoints

Receives partner transaction submissions.

Responses:
- 200 {"result": 1, "totalamount", "totaldiscount", "finalamount"}
- 400/401 {"result": 0, "resultmessage"}
"""
from fastapi import APIRouter, Body, Depends
from starlette.concurrency import run_in_threadpool
from typing import Optional
import logging

from ..models.transactions import TransactionRequest, SuccessResponse, FailedResponse
from ..services.validation_service import RequestValidator, get_request_validator

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post(
    "/submittrxmessage",
    response_model=SuccessResponse,
    responses={
        400: {"model": FailedResponse, "description": "Malformed or inconsistent request"},
        401: {"model": FailedResponse, "description": "Authentication, timestamp or signature failure"},
    },
)
async def submit_transaction_endpoint(
    request: Optional[TransactionRequest] = Body(None),
    validator: RequestValidator = Depends(get_request_validator)
) -> SuccessResponse:
    """
    Validate a partner transaction and compute its discount.

    Validation is CPU-bound (primality test) and runs in the threadpool.

    Request Body:
        TransactionRequest (see model example)

    Returns:
        SuccessResponse with total, discount and final amount

    Raises:
        SubmitTrxError subclass for the first failed check; rendered by the
        application exception handler with its 400/401 status

    Example:
        POST /api/submittrxmessage
    """
    if request is not None:
        logger.debug(f"Received transaction: partnerkey={request.partnerkey}, partnerrefno={request.partnerrefno}")

    outcome = await run_in_threadpool(validator.validate, request)

    if not outcome.ok:
        raise outcome.error

    return outcome.success

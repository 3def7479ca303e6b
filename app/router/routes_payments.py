from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from app.dto.payment import PaymentInstructionIn
from app.models.transaction import TransactionResult
from app.services.payment_service import PaymentInstructionService
from app.utils.enums import TransactionStatus

router = APIRouter(tags=["payments"])


def get_service() -> PaymentInstructionService:
    return PaymentInstructionService()


@router.post(
    "/payment-instructions",
    response_model=TransactionResult,
    responses={status.HTTP_400_BAD_REQUEST: {"model": TransactionResult}},
)
def process_payment_instruction(
    payload: PaymentInstructionIn,
    service: PaymentInstructionService = Depends(get_service),
) -> JSONResponse:
    result = service.evaluate(payload.accounts, payload.instruction)
    # Pending and successful outcomes are both accepted requests.
    status_code = status.HTTP_400_BAD_REQUEST if result.status == TransactionStatus.FAILED else status.HTTP_200_OK
    return JSONResponse(status_code=status_code, content=result.model_dump(mode="json"))

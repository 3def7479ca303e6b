from pydantic import BaseModel, Field

from app.models.account import AccountSnapshot
from app.models.instruction import ParsedInstruction
from app.utils.enums import InstructionType, StatusCode, TransactionStatus


class TransactionResult(BaseModel):
    type: InstructionType | None = None
    amount: int | None = None
    currency: str | None = None
    debit_account: str | None = None
    credit_account: str | None = None
    execute_by: str | None = None
    status: TransactionStatus
    status_reason: str
    status_code: StatusCode
    accounts: list[AccountSnapshot] = Field(default_factory=list)

    @classmethod
    def malformed(cls, reason: str) -> "TransactionResult":
        return cls(
            status=TransactionStatus.FAILED,
            status_reason=reason,
            status_code=StatusCode.MALFORMED_INSTRUCTION,
        )

    @classmethod
    def for_instruction(
        cls,
        parsed: ParsedInstruction,
        *,
        status: TransactionStatus,
        status_code: StatusCode,
        status_reason: str,
        accounts: list[AccountSnapshot],
    ) -> "TransactionResult":
        return cls(
            type=parsed.type,
            amount=parsed.amount,
            currency=parsed.currency,
            debit_account=parsed.debit_account,
            credit_account=parsed.credit_account,
            execute_by=parsed.execute_by,
            status=status,
            status_reason=status_reason,
            status_code=status_code,
            accounts=accounts,
        )

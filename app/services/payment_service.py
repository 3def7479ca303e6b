import logging
from collections.abc import Iterable
from datetime import date

from app.models.account import Account, AccountSnapshot
from app.models.instruction import ParsedInstruction, Unparsed
from app.models.transaction import TransactionResult
from app.repositories.account_repository import AccountRepository
from app.utils.config import settings
from app.utils.enums import SUPPORTED_CURRENCIES, StatusCode, TransactionStatus
from app.utils.parser import parse_instruction
from app.utils.time import utc_today
from app.utils.validators import parse_execution_date

logger = logging.getLogger(__name__)

MALFORMED_REASON = "Malformed instruction: unable to parse keywords"
CURRENCY_MISMATCH_REASON = "Account currency mismatch"
UNSUPPORTED_CURRENCY_REASON = "Unsupported currency. Only NGN, USD, GBP, and GHS are supported"
SAME_ACCOUNT_REASON = "Debit and credit accounts cannot be the same"
INVALID_DATE_REASON = "Invalid date format"
PENDING_REASON = "Transaction scheduled for future execution"
SUCCESS_REASON = "Transaction executed successfully"


class PaymentInstructionService:
    def __init__(self, strict_anchor: bool | None = None):
        self.strict_anchor = settings.instruction_strict_anchor if strict_anchor is None else strict_anchor

    def evaluate(
        self, accounts: Iterable[Account], instruction: str, *, today: date | None = None
    ) -> TransactionResult:
        parsed = parse_instruction(instruction, strict_anchor=self.strict_anchor)
        if isinstance(parsed, Unparsed):
            result = TransactionResult.malformed(MALFORMED_REASON)
        else:
            result = self._settle(AccountRepository(accounts), parsed, today or utc_today())

        logger.info(
            "Payment instruction evaluated. status=%s status_code=%s type=%s",
            result.status,
            result.status_code,
            result.type,
        )
        return result

    def _settle(
        self, repository: AccountRepository, parsed: ParsedInstruction, today: date
    ) -> TransactionResult:
        # Checks run in a fixed order; the first failing rule decides the outcome.
        def failed(code: StatusCode, reason: str, accounts: list[AccountSnapshot]) -> TransactionResult:
            return TransactionResult.for_instruction(
                parsed,
                status=TransactionStatus.FAILED,
                status_code=code,
                status_reason=reason,
                accounts=accounts,
            )

        debit = repository.get_snapshot(parsed.debit_account)
        credit = repository.get_snapshot(parsed.credit_account)
        if debit is None or credit is None:
            missing = parsed.debit_account if debit is None else parsed.credit_account
            return failed(
                StatusCode.ACCOUNT_NOT_FOUND,
                f"Account not found: {missing}",
                repository.list_snapshots(parsed.debit_account, parsed.credit_account),
            )

        if debit.currency != parsed.currency or credit.currency != parsed.currency:
            return failed(StatusCode.CURRENCY_MISMATCH, CURRENCY_MISMATCH_REASON, [debit, credit])

        if parsed.currency not in SUPPORTED_CURRENCIES:
            return failed(StatusCode.UNSUPPORTED_CURRENCY, UNSUPPORTED_CURRENCY_REASON, [debit, credit])

        if parsed.debit_account == parsed.credit_account:
            return failed(StatusCode.SAME_ACCOUNT, SAME_ACCOUNT_REASON, [debit])

        execution_date = None
        if parsed.execute_by is not None:
            execution_date = parse_execution_date(parsed.execute_by)
            if execution_date is None:
                return failed(StatusCode.INVALID_DATE, INVALID_DATE_REASON, [debit, credit])

        involved = repository.list_snapshots(parsed.debit_account, parsed.credit_account)

        if execution_date is not None and execution_date > today:
            return TransactionResult.for_instruction(
                parsed,
                status=TransactionStatus.PENDING,
                status_code=StatusCode.PENDING,
                status_reason=PENDING_REASON,
                accounts=involved,
            )

        if debit.balance_before < parsed.amount:
            return failed(
                StatusCode.INSUFFICIENT_FUNDS,
                f"Insufficient funds in account {parsed.debit_account}: "
                f"has {debit.balance_before} {parsed.currency}, needs {parsed.amount} {parsed.currency}",
                involved,
            )

        debit_entry = next(item for item in involved if item.id == parsed.debit_account)
        credit_entry = next(item for item in involved if item.id == parsed.credit_account)
        debit_entry.balance -= parsed.amount
        credit_entry.balance += parsed.amount
        return TransactionResult.for_instruction(
            parsed,
            status=TransactionStatus.SUCCESSFUL,
            status_code=StatusCode.SUCCESSFUL,
            status_reason=SUCCESS_REASON,
            accounts=involved,
        )


def evaluate(accounts: Iterable[Account], instruction: str, *, today: date | None = None) -> TransactionResult:
    return PaymentInstructionService().evaluate(accounts, instruction, today=today)

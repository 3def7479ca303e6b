from enum import StrEnum


class TransactionStatus(StrEnum):
    SUCCESSFUL = "successful"
    PENDING = "pending"
    FAILED = "failed"


class InstructionType(StrEnum):
    DEBIT = "DEBIT"
    CREDIT = "CREDIT"


class StatusCode(StrEnum):
    MALFORMED_INSTRUCTION = "SY03"
    ACCOUNT_NOT_FOUND = "AC03"
    CURRENCY_MISMATCH = "CU01"
    UNSUPPORTED_CURRENCY = "CU02"
    SAME_ACCOUNT = "AC02"
    INVALID_DATE = "DT01"
    PENDING = "AP02"
    INSUFFICIENT_FUNDS = "AC01"
    SUCCESSFUL = "AP00"


class Currency(StrEnum):
    NGN = "NGN"
    USD = "USD"
    GBP = "GBP"
    GHS = "GHS"


SUPPORTED_CURRENCIES: frozenset[str] = frozenset(currency.value for currency in Currency)

from datetime import date, timedelta

import pytest

from app.models.account import Account
from app.models.instruction import ParsedInstruction
from app.repositories.account_repository import AccountRepository
from app.services.payment_service import PaymentInstructionService, evaluate
from app.utils.enums import InstructionType, StatusCode, TransactionStatus

TODAY = date(2026, 3, 10)

DEBIT_A1_TO_A2 = "DEBIT {amount} {currency} FROM ACCOUNT A1 FOR CREDIT TO ACCOUNT {credit}"


def instruction(amount=50, currency="USD", credit="A2", on=None):
    text = DEBIT_A1_TO_A2.format(amount=amount, currency=currency, credit=credit)
    return f"{text} ON {on}" if on else text


def balances(result):
    return {item.id: (item.balance_before, item.balance) for item in result.accounts}


def test_successful_debit_moves_funds_in_snapshot(accounts):
    result = evaluate(accounts, instruction(amount=200), today=TODAY)

    assert result.status == TransactionStatus.SUCCESSFUL
    assert result.status_code == StatusCode.SUCCESSFUL
    assert result.status_reason == "Transaction executed successfully"
    assert result.type is InstructionType.DEBIT
    assert result.amount == 200
    assert result.currency == "USD"
    assert (result.debit_account, result.credit_account) == ("A1", "A2")
    assert balances(result) == {"A1": (500, 300), "A2": (100, 300)}


def test_credit_instruction_debits_the_from_account(accounts):
    result = evaluate(accounts, "CREDIT 100 USD TO ACCOUNT A2 FOR DEBIT FROM ACCOUNT A1", today=TODAY)

    assert result.status_code == StatusCode.SUCCESSFUL
    assert result.type is InstructionType.CREDIT
    assert balances(result) == {"A1": (500, 400), "A2": (100, 200)}


def test_insufficient_funds_leaves_balances(accounts):
    result = evaluate(accounts, instruction(amount=900), today=TODAY)

    assert result.status == TransactionStatus.FAILED
    assert result.status_code == StatusCode.INSUFFICIENT_FUNDS
    assert result.status_reason == "Insufficient funds in account A1: has 500 USD, needs 900 USD"
    assert balances(result) == {"A1": (500, 500), "A2": (100, 100)}


def test_exact_balance_is_sufficient(accounts):
    result = evaluate(accounts, instruction(amount=500), today=TODAY)

    assert result.status_code == StatusCode.SUCCESSFUL
    assert balances(result)["A1"] == (500, 0)


def test_same_account_is_rejected_with_single_snapshot(accounts):
    result = evaluate(accounts, instruction(credit="A1"), today=TODAY)

    assert result.status_code == StatusCode.SAME_ACCOUNT
    assert [item.id for item in result.accounts] == ["A1"]


def test_unknown_account_reports_missing_id(accounts):
    result = evaluate(accounts, instruction(credit="ZZ"), today=TODAY)

    assert result.status == TransactionStatus.FAILED
    assert result.status_code == StatusCode.ACCOUNT_NOT_FOUND
    assert result.status_reason == "Account not found: ZZ"
    assert [item.id for item in result.accounts] == ["A1"]


def test_unknown_debit_account_is_named_first():
    result = evaluate([Account(id="A2", balance=1, currency="USD")], instruction(), today=TODAY)

    assert result.status_reason == "Account not found: A1"


def test_unsupported_currency(accounts):
    xxx_accounts = [Account(id=item.id, balance=item.balance, currency="xxx") for item in accounts]

    result = evaluate(xxx_accounts, instruction(currency="XXX"), today=TODAY)

    assert result.status_code == StatusCode.UNSUPPORTED_CURRENCY
    assert result.currency == "XXX"
    assert [item.currency for item in result.accounts] == ["XXX", "XXX"]


def test_future_date_is_pending(accounts):
    result = evaluate(accounts, instruction(on="2999-01-01"))

    assert result.status == TransactionStatus.PENDING
    assert result.status_code == StatusCode.PENDING
    assert result.execute_by == "2999-01-01"
    assert balances(result) == {"A1": (500, 500), "A2": (100, 100)}


def test_date_equal_to_today_executes_now(accounts):
    result = evaluate(accounts, instruction(on=TODAY.isoformat()), today=TODAY)

    assert result.status_code == StatusCode.SUCCESSFUL


def test_past_date_executes_now(accounts):
    past = (TODAY - timedelta(days=400)).isoformat()

    result = evaluate(accounts, instruction(on=past), today=TODAY)

    assert result.status_code == StatusCode.SUCCESSFUL


def test_tomorrow_is_pending(accounts):
    tomorrow = (TODAY + timedelta(days=1)).isoformat()

    result = evaluate(accounts, instruction(on=tomorrow), today=TODAY)

    assert result.status_code == StatusCode.PENDING


@pytest.mark.parametrize("text", ["", "pay A2 fifty dollars", "DEBIT 50 USD FROM ACCOUNT A1"])
def test_unparsable_instruction_echoes_nothing(accounts, text):
    result = evaluate(accounts, text, today=TODAY)

    assert result.status == TransactionStatus.FAILED
    assert result.status_code == StatusCode.MALFORMED_INSTRUCTION
    assert result.accounts == []
    assert result.model_dump(include={"type", "amount", "currency", "debit_account", "credit_account", "execute_by"}) == {
        "type": None,
        "amount": None,
        "currency": None,
        "debit_account": None,
        "credit_account": None,
        "execute_by": None,
    }


def test_account_not_found_outranks_currency_mismatch():
    gbp_only = [Account(id="A1", balance=500, currency="GBP")]

    result = evaluate(gbp_only, instruction(credit="ZZ"), today=TODAY)

    assert result.status_code == StatusCode.ACCOUNT_NOT_FOUND


def test_currency_mismatch_outranks_unsupported_currency(accounts):
    result = evaluate(accounts, instruction(currency="XXX"), today=TODAY)

    assert result.status_code == StatusCode.CURRENCY_MISMATCH
    assert [item.id for item in result.accounts] == ["A1", "A2"]


def test_currency_mismatch_on_credit_side():
    mixed = [Account(id="A1", balance=500, currency="USD"), Account(id="A2", balance=100, currency="GHS")]

    result = evaluate(mixed, instruction(), today=TODAY)

    assert result.status_code == StatusCode.CURRENCY_MISMATCH
    assert result.status_reason == "Account currency mismatch"


def test_currency_mismatch_outranks_same_account():
    gbp_only = [Account(id="A1", balance=500, currency="GBP")]

    result = evaluate(gbp_only, instruction(credit="A1"), today=TODAY)

    assert result.status_code == StatusCode.CURRENCY_MISMATCH
    assert [item.id for item in result.accounts] == ["A1", "A1"]


def test_same_account_outranks_insufficient_funds(accounts):
    result = evaluate(accounts, instruction(amount=10_000, credit="A1"), today=TODAY)

    assert result.status_code == StatusCode.SAME_ACCOUNT


def test_pending_outranks_insufficient_funds(accounts):
    result = evaluate(accounts, instruction(amount=10_000, on="2999-01-01"), today=TODAY)

    assert result.status_code == StatusCode.PENDING


def test_invalid_execution_date_is_reported_before_scheduling(accounts):
    parsed = ParsedInstruction(
        type=InstructionType.DEBIT,
        amount=50,
        currency="USD",
        debit_account="A1",
        credit_account="A2",
        execute_by="2023-02-30",
    )

    result = PaymentInstructionService()._settle(AccountRepository(accounts), parsed, TODAY)

    assert result.status_code == StatusCode.INVALID_DATE
    assert result.status_reason == "Invalid date format"
    assert [item.id for item in result.accounts] == ["A1", "A2"]


def test_snapshot_follows_caller_order_for_involved_accounts():
    ordered = [Account(id="A2", balance=100, currency="USD"), Account(id="A1", balance=500, currency="USD")]

    result = evaluate(ordered, instruction(), today=TODAY)

    assert [item.id for item in result.accounts] == ["A2", "A1"]


def test_lowercase_account_currency_matches_instruction():
    lower = [Account(id="A1", balance=500, currency="usd"), Account(id="A2", balance=0, currency="Usd")]

    result = evaluate(lower, instruction(currency="usd"), today=TODAY)

    assert result.status_code == StatusCode.SUCCESSFUL
    assert result.currency == "USD"
    assert {item.currency for item in result.accounts} == {"USD"}


def test_evaluation_is_idempotent(accounts):
    first = evaluate(accounts, instruction(amount=200), today=TODAY)
    second = evaluate(accounts, instruction(amount=200), today=TODAY)

    assert first == second


def test_caller_accounts_are_not_mutated(accounts):
    before = [item.model_dump() for item in accounts]

    evaluate(accounts, instruction(amount=200), today=TODAY)

    assert [item.model_dump() for item in accounts] == before


def test_balance_is_conserved_on_success(accounts):
    result = evaluate(accounts, instruction(amount=123), today=TODAY)

    debit, credit = (next(item for item in result.accounts if item.id == account_id) for account_id in ("A1", "A2"))
    assert debit.balance == debit.balance_before - 123
    assert credit.balance == credit.balance_before + 123
    assert debit.balance + credit.balance == debit.balance_before + credit.balance_before


def test_strict_anchor_service_rejects_leading_noise(accounts):
    service = PaymentInstructionService(strict_anchor=True)

    result = service.evaluate(accounts, "now " + instruction(), today=TODAY)

    assert result.status_code == StatusCode.MALFORMED_INSTRUCTION


def test_service_defaults_to_configured_anchor_mode(monkeypatch):
    from app.utils.config import settings

    monkeypatch.setattr(settings, "instruction_strict_anchor", True)

    assert PaymentInstructionService().strict_anchor is True


def test_defaults_to_utc_today(accounts, monkeypatch):
    monkeypatch.setattr("app.services.payment_service.utc_today", lambda: date(2999, 1, 1))

    result = evaluate(accounts, instruction(on="2999-01-01"))

    assert result.status_code == StatusCode.SUCCESSFUL

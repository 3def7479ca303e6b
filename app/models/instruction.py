from dataclasses import dataclass

from app.utils.enums import InstructionType


@dataclass(frozen=True)
class Unparsed:
    """The instruction did not match the grammar; nothing from it is trusted."""


@dataclass(frozen=True)
class ParsedInstruction:
    type: InstructionType
    amount: int
    currency: str
    debit_account: str
    credit_account: str
    execute_by: str | None = None


ParseOutcome = ParsedInstruction | Unparsed

UNPARSED = Unparsed()

import logging
import string
from collections.abc import Sequence

from app.models.instruction import UNPARSED, ParsedInstruction, ParseOutcome
from app.utils.enums import InstructionType
from app.utils.tokenizer import tokenize
from app.utils.validators import is_valid_account_id, is_valid_date

logger = logging.getLogger(__name__)

KEYWORD_ON = "ON"
ANCHORS = frozenset(kind.value for kind in InstructionType)
_CURRENCY_LETTERS = frozenset(string.ascii_uppercase)

# None marks an account identifier slot; everything else is a literal keyword.
GRAMMAR_TAILS: dict[InstructionType, tuple[str | None, ...]] = {
    InstructionType.DEBIT: ("FROM", "ACCOUNT", None, "FOR", "CREDIT", "TO", "ACCOUNT", None),
    InstructionType.CREDIT: ("TO", "ACCOUNT", None, "FOR", "DEBIT", "FROM", "ACCOUNT", None),
}


class InstructionSyntaxError(Exception):
    """Raised inside the parser to abandon a parse; never escapes parse_instruction."""


class TokenCursor:
    def __init__(self, tokens: Sequence[str], position: int = 0):
        self.tokens = tuple(tokens)
        self.upper = tuple(token.upper() for token in self.tokens)
        self.position = position

    def at_end(self) -> bool:
        return self.position >= len(self.tokens)

    def peek_keyword(self) -> str | None:
        if self.at_end():
            return None
        return self.upper[self.position]

    def take(self, what: str) -> str:
        if self.at_end():
            raise InstructionSyntaxError(f"expected {what}, reached end of instruction")
        token = self.tokens[self.position]
        self.position += 1
        return token

    def expect(self, keyword: str) -> None:
        token = self.take(keyword)
        if token.upper() != keyword:
            raise InstructionSyntaxError(f"expected {keyword}, got {token!r}")


def find_anchor(cursor: TokenCursor, *, strict: bool = False) -> tuple[InstructionType, int]:
    # The earliest DEBIT/CREDIT anywhere in the stream fixes the type.
    candidates = cursor.upper[:1] if strict else cursor.upper
    for index, word in enumerate(candidates):
        if word in ANCHORS:
            return InstructionType(word), index
    raise InstructionSyntaxError("no DEBIT or CREDIT keyword")


def parse_amount(cursor: TokenCursor) -> int:
    token = cursor.take("amount")
    try:
        value = int(token)
    except ValueError as exc:
        raise InstructionSyntaxError(f"amount {token!r} is not an integer") from exc
    if value <= 0 or str(value) != token:
        raise InstructionSyntaxError(f"amount {token!r} is not a canonical positive integer")
    return value


def parse_currency(cursor: TokenCursor) -> str:
    code = cursor.take("currency").upper()
    if len(code) != 3 or not all(char in _CURRENCY_LETTERS for char in code):
        raise InstructionSyntaxError(f"currency {code!r} is not a three-letter code")
    return code


def parse_tail(cursor: TokenCursor, kind: InstructionType) -> tuple[str, str]:
    identifiers: list[str] = []
    for expected in GRAMMAR_TAILS[kind]:
        if expected is not None:
            cursor.expect(expected)
            continue
        account_id = cursor.take("account identifier")
        if not is_valid_account_id(account_id):
            raise InstructionSyntaxError(f"invalid account identifier {account_id!r}")
        identifiers.append(account_id)
    first, second = identifiers
    return first, second


def parse_date_clause(cursor: TokenCursor) -> str | None:
    if cursor.peek_keyword() != KEYWORD_ON:
        return None
    cursor.expect(KEYWORD_ON)
    value = cursor.take("execution date")
    if not is_valid_date(value):
        raise InstructionSyntaxError(f"invalid execution date {value!r}")
    return value


def parse_instruction(text: str, *, strict_anchor: bool = False) -> ParseOutcome:
    """Parse a payment instruction into a ParsedInstruction, or UNPARSED.

    DEBIT <amount> <CUR> FROM ACCOUNT <id> FOR CREDIT TO ACCOUNT <id> [ON <YYYY-MM-DD>]
    CREDIT <amount> <CUR> TO ACCOUNT <id> FOR DEBIT FROM ACCOUNT <id> [ON <YYYY-MM-DD>]

    Keywords are case-insensitive. Tokens after the grammar tail that do not
    open an ON clause are ignored, as are tokens after the date.
    """
    cursor = TokenCursor(tokenize(text))
    try:
        kind, anchor_index = find_anchor(cursor, strict=strict_anchor)
        cursor.position = anchor_index + 1
        amount = parse_amount(cursor)
        currency = parse_currency(cursor)
        first_account, second_account = parse_tail(cursor, kind)
        execute_by = parse_date_clause(cursor)
    except InstructionSyntaxError as exc:
        logger.debug("Instruction rejected by parser. reason=%s", exc)
        return UNPARSED

    if kind is InstructionType.DEBIT:
        debit_account, credit_account = first_account, second_account
    else:
        credit_account, debit_account = first_account, second_account

    return ParsedInstruction(
        type=kind,
        amount=amount,
        currency=currency,
        debit_account=debit_account,
        credit_account=credit_account,
        execute_by=execute_by,
    )

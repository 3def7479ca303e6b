from pydantic import BaseModel, ConfigDict, Field


class Account(BaseModel):
    """Caller-owned account record. Read by the core, never written."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(min_length=1)
    balance: int = Field(ge=0)
    currency: str = Field(min_length=3, max_length=3)


class AccountSnapshot(BaseModel):
    id: str
    balance: int
    balance_before: int
    currency: str

    @classmethod
    def of(cls, account: Account) -> "AccountSnapshot":
        return cls(
            id=account.id,
            balance=account.balance,
            balance_before=account.balance,
            currency=account.currency.upper(),
        )

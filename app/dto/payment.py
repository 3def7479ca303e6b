from pydantic import BaseModel, Field

from app.models.account import Account


class PaymentInstructionIn(BaseModel):
    accounts: list[Account] = Field(min_length=1)
    instruction: str = Field(min_length=1)

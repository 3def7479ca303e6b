from collections.abc import Iterable

from app.models.account import Account, AccountSnapshot


class AccountRepository:
    """Read-only lookups over the account list supplied with a request.

    Every lookup hands back a fresh AccountSnapshot; the caller's Account
    records are never exposed to the pipeline.
    """

    def __init__(self, accounts: Iterable[Account]):
        self._accounts = tuple(accounts)

    def get_snapshot(self, account_id: str) -> AccountSnapshot | None:
        for account in self._accounts:
            if account.id == account_id:
                return AccountSnapshot.of(account)
        return None

    def list_snapshots(self, *account_ids: str) -> list[AccountSnapshot]:
        wanted = set(account_ids)
        return [AccountSnapshot.of(account) for account in self._accounts if account.id in wanted]

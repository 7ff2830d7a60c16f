from __future__ import annotations

from typing import Optional, Protocol

from .model import Account


class AccountRepository(Protocol):
    """Repository interface for Account.

    Note (DIP): services depend on this interface, never on a concrete database.
    """

    def get_by_id(self, account_id: int) -> Optional[Account]:
        raise NotImplementedError

    def get_by_email(self, email: str) -> Optional[Account]:
        raise NotImplementedError

    def delete_by_id(self, account_id: int) -> bool:
        """Delete the account; profile, attendance and leave rows cascade."""

        raise NotImplementedError

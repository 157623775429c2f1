"""Wallet session: who is acting, if anyone.

Wallet discovery and the provider connection happen outside this package;
the session only tracks the currently selected account and tells listeners
when it changes.
"""

from collections.abc import Callable

from theater_ledger.exceptions import NotConnectedError
from theater_ledger.logging import get_ledger_logger

logger = get_ledger_logger(__name__)

AccountListener = Callable[[str], None]


class WalletSession:
    """Holds the current account. An empty account means no session."""

    def __init__(self, account: str = "") -> None:
        self._account = account or ""
        self._listeners: list[AccountListener] = []

    @property
    def current_account(self) -> str:
        return self._account

    @property
    def is_connected(self) -> bool:
        return bool(self._account)

    def connect(self, account: str) -> None:
        """Select an account, as when the provider returns ``eth_requestAccounts``."""
        self._set(account or "")

    def switch_account(self, account: str) -> None:
        """Handle the provider's ``accountsChanged`` event. An empty value disconnects."""
        self._set(account or "")

    def disconnect(self) -> None:
        self._set("")

    def on_change(self, listener: AccountListener) -> Callable[[], None]:
        """Register a listener; returns a function that unregisters it."""
        self._listeners.append(listener)
        return lambda: self._listeners.remove(listener)

    def require_account(self) -> str:
        """Return the current account or raise NotConnectedError."""
        if not self._account:
            raise NotConnectedError("Please connect wallet first")
        return self._account

    def _set(self, account: str) -> None:
        if account == self._account:
            return
        self._account = account
        logger.info(f"Wallet account changed to {account or '<none>'}")
        for listener in list(self._listeners):
            listener(account)

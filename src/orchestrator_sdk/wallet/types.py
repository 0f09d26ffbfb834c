"""
Wallet adapter contract.

Every signing backend is a WalletAdapter. Optional features are separate
capability interfaces: an adapter that can register chains with its backend
also implements ChainSuggestible, one that can report account switches also
implements AccountWatcher. Callers query them with as_chain_suggestible() and
as_account_watcher() instead of probing for methods.
"""

from abc import ABC, abstractmethod
from typing import Any, Awaitable, Callable, Optional, Protocol, Sequence, Union, runtime_checkable

from orchestrator_sdk.config import ChainConfig
from orchestrator_sdk.tx.client import OfflineSigner
from orchestrator_sdk.tx.types import BroadcastResult, EncodeObject, Fee, WalletAccount

AccountCallback = Callable[[WalletAccount], Union[None, Awaitable[None]]]


@runtime_checkable
class WalletCapability(Protocol):
    """
    The object a wallet backend exposes to its host (the extension's injected
    global in a browser, a local keyring in Python).

    `experimental_suggest_chain(chain_info)` is optional.
    """

    async def enable(self, chain_id: str) -> None:
        ...

    def get_offline_signer(self, chain_id: str) -> OfflineSigner:
        ...


@runtime_checkable
class HostEventTarget(Protocol):
    def add_event_listener(self, event_name: str, listener: Callable[[Any], Any]) -> None:
        ...

    def remove_event_listener(self, event_name: str, listener: Callable[[Any], Any]) -> None:
        ...


class WalletAdapter(ABC):
    """Uniform contract over signing backends."""

    @abstractmethod
    def is_available(self) -> bool:
        """Whether the backend can be used right now. Never raises."""

    @abstractmethod
    def get_name(self) -> str:
        ...

    @abstractmethod
    async def connect(self, chain_id: str) -> WalletAccount:
        """
        Authorize the backend for `chain_id` and return its first account.

        Raises:
            WalletUnavailable: If is_available() is False
            WalletConnectionFailed: If authorization fails or no account is exposed
        """

    async def disconnect(self) -> None:
        """Backends without a disconnect primitive treat this as a no-op."""
        return None

    @abstractmethod
    async def get_signer(self, chain_id: str) -> OfflineSigner:
        ...

    @abstractmethod
    async def sign_and_broadcast_result(
        self,
        endpoint: str,
        chain_id: str,
        messages: Sequence[EncodeObject],
        fee: Fee,
        memo: str = "",
    ) -> BroadcastResult:
        """
        Sign `messages` with the backend's first account, broadcast them through
        `endpoint` and return the included transaction.

        Raises:
            BroadcastFailure: If the chain answers with a non-zero code
            InsufficientFunds, OutOfGas, UserRejectedSigning: Classified backend failures
        """

    async def sign_and_broadcast(
        self,
        endpoint: str,
        chain_id: str,
        messages: Sequence[EncodeObject],
        fee: Fee,
        memo: str = "",
    ) -> str:
        """Same as sign_and_broadcast_result() but returns only the transaction hash."""
        result = await self.sign_and_broadcast_result(endpoint, chain_id, messages, fee, memo)
        return result.transaction_hash


class ChainSuggestible(ABC):
    @abstractmethod
    async def suggest_chain(self, chain: ChainConfig) -> None:
        """Ask the backend to register `chain`."""


class AccountSubscription:
    """
    Handle for one account-change subscription.

    close() (alias dispose()) removes the listener; calling it again does
    nothing. Also usable as a context manager.
    """

    def __init__(self, unsubscribe: Callable[[], None]):
        self._unsubscribe: Optional[Callable[[], None]] = unsubscribe

    @property
    def closed(self) -> bool:
        return self._unsubscribe is None

    def close(self) -> None:
        unsubscribe, self._unsubscribe = self._unsubscribe, None
        if unsubscribe is not None:
            unsubscribe()

    dispose = close

    def __enter__(self) -> 'AccountSubscription':
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()


class AccountWatcher(ABC):
    @abstractmethod
    def on_account_change(self, chain_id: str, callback: AccountCallback) -> AccountSubscription:
        """
        Call `callback` with the new first account whenever the user switches
        accounts in the backend.

        Only one subscription may be open per adapter.

        Raises:
            SubscriptionActiveError: If the previous subscription was not closed
        """


def as_chain_suggestible(adapter: WalletAdapter) -> Optional[ChainSuggestible]:
    return adapter if isinstance(adapter, ChainSuggestible) else None


def as_account_watcher(adapter: WalletAdapter) -> Optional[AccountWatcher]:
    return adapter if isinstance(adapter, AccountWatcher) else None

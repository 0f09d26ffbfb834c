"""
Wallet adapter registry.

The host environment is injected as a WalletEnvironment: the capability object
each extension would expose (None when the backend is absent), the event target
that carries keystore notifications, and a HID check for hardware wallets.

Usage:
    env = WalletEnvironment(keplr=LocalKeyring.from_mnemonic(mnemonic))
    wallet = get_wallet(WalletType.KEPLR, env)
    account = await wallet.connect(chain.chain_id)
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Optional

from .events import EventTarget
from .extension import ExtensionWalletAdapter, build_chain_info
from .keplr import KeplrWalletAdapter
from .leap import LeapWalletAdapter
from .ledger import LedgerWalletAdapter
from .local import LocalKeyring, LocalOfflineSigner
from .types import (
    AccountSubscription,
    AccountWatcher,
    ChainSuggestible,
    WalletAdapter,
    WalletCapability,
    as_account_watcher,
    as_chain_suggestible,
)


class WalletType(str, Enum):
    KEPLR = "keplr"
    LEAP = "leap"
    LEDGER = "ledger"


@dataclass
class WalletEnvironment:
    keplr: Optional[WalletCapability] = None
    leap: Optional[WalletCapability] = None
    events: EventTarget = field(default_factory=EventTarget)
    hid_check: Optional[Callable[[], bool]] = None


def get_wallet(wallet_type: WalletType, env: WalletEnvironment) -> WalletAdapter:
    """Adapter for `wallet_type`; whether it can be used is reported by is_available()."""
    wallet_type = WalletType(wallet_type)
    if wallet_type is WalletType.KEPLR:
        return KeplrWalletAdapter(env.keplr, env.events)
    if wallet_type is WalletType.LEAP:
        return LeapWalletAdapter(env.leap, env.events)
    return LedgerWalletAdapter(env.hid_check)


def create_wallet(wallet_type: WalletType, env: WalletEnvironment) -> Optional[WalletAdapter]:
    """Adapter for `wallet_type`, or None when its backend is not present."""
    adapter = get_wallet(wallet_type, env)
    return adapter if adapter.is_available() else None


def get_available_wallets(env: WalletEnvironment) -> list[WalletType]:
    return [t for t in WalletType if get_wallet(t, env).is_available()]


__all__ = [
    "WalletType",
    "WalletEnvironment",
    "get_wallet",
    "create_wallet",
    "get_available_wallets",
    "EventTarget",
    "WalletAdapter",
    "WalletCapability",
    "ChainSuggestible",
    "AccountWatcher",
    "AccountSubscription",
    "as_chain_suggestible",
    "as_account_watcher",
    "ExtensionWalletAdapter",
    "KeplrWalletAdapter",
    "LeapWalletAdapter",
    "LedgerWalletAdapter",
    "LocalKeyring",
    "LocalOfflineSigner",
    "build_chain_info",
]

"""
Ledger hardware wallet adapter.

Only availability detection is implemented. Connecting and signing raise
WalletNotSupported until a HID transport and the Cosmos app protocol are wired
in; the adapter still satisfies WalletAdapter so callers stay backend-agnostic.
"""

import logging
from typing import Callable, Optional, Sequence

from orchestrator_sdk.errors import WalletNotSupported, WalletUnavailable
from orchestrator_sdk.tx.client import OfflineSigner
from orchestrator_sdk.tx.types import BroadcastResult, EncodeObject, Fee, WalletAccount
from orchestrator_sdk.wallet.types import WalletAdapter

logger = logging.getLogger(__name__)


class LedgerWalletAdapter(WalletAdapter):
    def __init__(self, hid_check: Optional[Callable[[], bool]] = None):
        """
        Args:
            hid_check: Returns True when the host offers HID device access
        """
        self._hid_check = hid_check

    def get_name(self) -> str:
        return "Ledger"

    def is_available(self) -> bool:
        if self._hid_check is None:
            return False
        try:
            return bool(self._hid_check())
        except Exception as e:
            logger.debug(f"HID check failed: {e}")
            return False

    async def connect(self, chain_id: str) -> WalletAccount:
        if not self.is_available():
            raise WalletUnavailable("HID transport not supported on this host")
        raise WalletNotSupported("Ledger integration is not supported yet")

    async def get_signer(self, chain_id: str) -> OfflineSigner:
        raise WalletNotSupported("Ledger signer is not supported yet")

    async def sign_and_broadcast_result(
        self,
        endpoint: str,
        chain_id: str,
        messages: Sequence[EncodeObject],
        fee: Fee,
        memo: str = "",
    ) -> BroadcastResult:
        raise WalletNotSupported("Ledger signing is not supported yet")

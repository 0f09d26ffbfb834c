"""
Local keyring backend.

Exposes a cosmpy LocalWallet through the same surface a browser extension
injects (enable / get_offline_signer / experimental_suggest_chain), so the
extension adapters can run headless.

Usage:
    keyring = LocalKeyring.from_mnemonic("word1 word2 ...", prefix="cosmos")
    wallet = KeplrWalletAdapter(keyring)
    account = await wallet.connect("cosmos_262144-1")
"""

import hashlib
import logging
from typing import Any, Iterable, Mapping, Optional

from cosmpy.aerial.wallet import LocalWallet, PrivateKey

from orchestrator_sdk.errors import WalletConnectionFailed, WalletError
from orchestrator_sdk.tx.types import WalletAccount

logger = logging.getLogger(__name__)


class LocalOfflineSigner:
    """OfflineSigner backed by a LocalWallet. Signs SHA256(sign_doc) with secp256k1."""

    def __init__(self, wallet: LocalWallet):
        self._wallet = wallet

    @property
    def address(self) -> str:
        return str(self._wallet.address())

    async def get_accounts(self) -> list[WalletAccount]:
        return [WalletAccount(
            address=self.address,
            pubkey=bytes.fromhex(self._wallet.public_key().public_key_hex),
        )]

    async def sign_direct(self, address: str, sign_doc: bytes) -> bytes:
        if address != self.address:
            raise WalletError(f"Signer does not hold a key for {address}")
        digest = hashlib.sha256(sign_doc).digest()
        return self._wallet.signer().sign_digest(digest)


class LocalKeyring:
    def __init__(self, wallet: LocalWallet, chain_ids: Optional[Iterable[str]] = None):
        """
        Args:
            wallet: Key material
            chain_ids: Chains the keyring accepts. None accepts any chain.
        """
        self._wallet = wallet
        self._chain_ids = set(chain_ids) if chain_ids is not None else None
        self._enabled: set[str] = set()

    @classmethod
    def from_private_key(cls, private_key: str, prefix: str = "cosmos", **kwargs) -> 'LocalKeyring':
        return cls(LocalWallet(PrivateKey(bytes.fromhex(private_key)), prefix=prefix), **kwargs)

    @classmethod
    def from_mnemonic(cls, mnemonic: str, prefix: str = "cosmos", **kwargs) -> 'LocalKeyring':
        return cls(LocalWallet.from_mnemonic(mnemonic, prefix=prefix), **kwargs)

    def is_enabled(self, chain_id: str) -> bool:
        return chain_id in self._enabled

    async def enable(self, chain_id: str) -> None:
        if self._chain_ids is not None and chain_id not in self._chain_ids:
            raise WalletConnectionFailed(f"There is no chain info for {chain_id}")
        self._enabled.add(chain_id)
        logger.debug(f"Local keyring enabled for {chain_id}")

    def get_offline_signer(self, chain_id: str) -> LocalOfflineSigner:
        if chain_id not in self._enabled:
            raise WalletError(f"Keyring is not enabled for {chain_id}")
        return LocalOfflineSigner(self._wallet)

    async def experimental_suggest_chain(self, chain_info: Mapping[str, Any]) -> None:
        chain_id = chain_info["chainId"]
        if self._chain_ids is not None:
            self._chain_ids.add(chain_id)
        logger.info(f"Chain {chain_id} added to local keyring")

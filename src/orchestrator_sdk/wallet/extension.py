"""
Adapter for extension-style wallets (Keplr, Leap).

Both backends expose the same capability object and differ only in their
display name and the host event fired when the user switches keys.
"""

import inspect
import logging
from typing import Any, Awaitable, Callable, ClassVar, Optional, Sequence

from orchestrator_sdk.config import DEFAULT_FEATURES, ChainConfig
from orchestrator_sdk.errors import (
    BroadcastFailure,
    OutOfGas,
    SubscriptionActiveError,
    WalletConnectionFailed,
    WalletNotSupported,
    WalletUnavailable,
    classify_wallet_error,
)
from orchestrator_sdk.tx.client import OfflineSigner, RestSigningClient, SigningClient
from orchestrator_sdk.tx.types import BroadcastResult, EncodeObject, Fee, WalletAccount
from orchestrator_sdk.wallet.types import (
    AccountCallback,
    AccountSubscription,
    AccountWatcher,
    ChainSuggestible,
    HostEventTarget,
    WalletAdapter,
    WalletCapability,
)

logger = logging.getLogger(__name__)

SigningClientFactory = Callable[[str, OfflineSigner], Awaitable[SigningClient]]

GAS_PRICE_STEP = {"low": 0.01, "average": 0.025, "high": 0.04}


def build_chain_info(chain: ChainConfig) -> dict[str, Any]:
    """Translate a ChainConfig into the ChainInfo shape extensions accept for suggestChain."""
    prefix = chain.bech32_prefix
    currency = {
        "coinDenom": chain.coin_denom,
        "coinMinimalDenom": chain.coin_minimal_denom,
        "coinDecimals": chain.coin_decimals,
    }
    return {
        "chainId": chain.chain_id,
        "chainName": chain.chain_name,
        "rpc": chain.rpc,
        "rest": chain.rest,
        "bip44": {"coinType": chain.coin_type},
        "bech32Config": {
            "bech32PrefixAccAddr": prefix,
            "bech32PrefixAccPub": f"{prefix}pub",
            "bech32PrefixValAddr": f"{prefix}valoper",
            "bech32PrefixValPub": f"{prefix}valoperpub",
            "bech32PrefixConsAddr": f"{prefix}valcons",
            "bech32PrefixConsPub": f"{prefix}valconspub",
        },
        "currencies": [dict(currency)],
        "feeCurrencies": [{**currency, "gasPriceStep": dict(GAS_PRICE_STEP)}],
        "stakeCurrency": dict(currency),
        "features": list(chain.features or DEFAULT_FEATURES),
    }


class ExtensionWalletAdapter(WalletAdapter, ChainSuggestible, AccountWatcher):
    name: ClassVar[str]
    keystore_event: ClassVar[str]

    def __init__(
        self,
        capability: Optional[WalletCapability] = None,
        events: Optional[HostEventTarget] = None,
        client_factory: Optional[SigningClientFactory] = None,
    ):
        """
        Args:
            capability: The backend's capability object, None when the backend is absent
            events: Host event target carrying the keystore change notification
            client_factory: Builds a signing client for (endpoint, signer)
        """
        self._capability = capability
        self._events = events
        self._client_factory = client_factory or RestSigningClient.connect_with_signer
        self._subscription: Optional[AccountSubscription] = None

    def is_available(self) -> bool:
        return self._capability is not None

    def get_name(self) -> str:
        return self.name

    def _require_capability(self) -> WalletCapability:
        if self._capability is None:
            raise WalletUnavailable(f"{self.name} extension not installed")
        return self._capability

    async def connect(self, chain_id: str) -> WalletAccount:
        capability = self._require_capability()

        try:
            await capability.enable(chain_id)
            accounts = await capability.get_offline_signer(chain_id).get_accounts()
        except WalletConnectionFailed:
            raise
        except Exception as e:
            raise WalletConnectionFailed(f"Failed to connect to {self.name}: {e}") from e

        if not accounts:
            raise WalletConnectionFailed("No accounts found")

        logger.info(f"Connected to {self.name} on {chain_id} as {accounts[0].address}")
        return accounts[0]

    async def get_signer(self, chain_id: str) -> OfflineSigner:
        capability = self._require_capability()
        await capability.enable(chain_id)
        return capability.get_offline_signer(chain_id)

    async def sign_and_broadcast_result(
        self,
        endpoint: str,
        chain_id: str,
        messages: Sequence[EncodeObject],
        fee: Fee,
        memo: str = "",
    ) -> BroadcastResult:
        self._require_capability()

        signer = await self.get_signer(chain_id)
        accounts = await signer.get_accounts()
        if not accounts:
            raise WalletConnectionFailed("No accounts available")

        client = await self._client_factory(endpoint, signer)
        result: Optional[BroadcastResult] = None
        try:
            result = await client.sign_and_broadcast(accounts[0].address, messages, fee, memo)
            if result.code != 0:
                raise BroadcastFailure(result.code, result.raw_log, result.transaction_hash, result.codespace)
        except Exception as e:
            classified = classify_wallet_error(e)
            if classified is e:
                raise
            if isinstance(classified, OutOfGas) and result is not None:
                classified.gas_wanted = result.gas_wanted
                classified.gas_used = result.gas_used
            raise classified from e
        finally:
            await client.close()

        logger.debug(f"{self.name} broadcast {result.transaction_hash} at height {result.height}")
        return result

    async def suggest_chain(self, chain: ChainConfig) -> None:
        capability = self._require_capability()

        suggest = getattr(capability, "experimental_suggest_chain", None)
        if suggest is None:
            raise WalletNotSupported(f"{self.name} cannot suggest chains")

        await suggest(build_chain_info(chain))

    def on_account_change(self, chain_id: str, callback: AccountCallback) -> AccountSubscription:
        if self._subscription is not None and not self._subscription.closed:
            raise SubscriptionActiveError("Close the current account subscription before subscribing again")

        capability, events = self._capability, self._events
        if capability is None or events is None:
            return AccountSubscription(lambda: None)

        async def handler(_detail: Any = None):
            try:
                accounts = await capability.get_offline_signer(chain_id).get_accounts()
            except Exception as e:
                logger.error(f"Failed to fetch account after keystore change: {e}")
                return
            if accounts:
                result = callback(accounts[0])
                if inspect.isawaitable(result):
                    await result

        events.add_event_listener(self.keystore_event, handler)

        def unsubscribe():
            events.remove_event_listener(self.keystore_event, handler)
            if self._subscription is subscription:
                self._subscription = None

        subscription = AccountSubscription(unsubscribe)
        self._subscription = subscription
        return subscription

import asyncio
from typing import Any, List, Optional, Sequence

from orchestrator_sdk.tx.types import BroadcastResult, EncodeObject, Fee, WalletAccount
from orchestrator_sdk.wallet.types import WalletAdapter

GOV_ADDRESS = "cosmos10d07y265gmmuvt4z0w9aw880jnsr700j6zn9kn"
GOV_HEX = "0x7b5fe22b5446f7c62ea27b8bd71cef94e03f3df2"

TEST_ACCOUNT = WalletAccount(address=GOV_ADDRESS, pubkey=b"\x02" + b"\x11" * 32)


def submit_proposal_events(proposal_id: str = "42") -> list[dict[str, Any]]:
    return [
        {"type": "message", "attributes": [{"key": "action", "value": "/cosmos.gov.v1.MsgSubmitProposal"}]},
        {
            "type": "submit_proposal",
            "attributes": [
                {"key": "proposal_id", "value": proposal_id},
                {"key": "proposal_messages", "value": ",/cosmos.evm.vm.v1.MsgUpdateParams"},
            ],
        },
    ]


class FakeSigner:
    def __init__(self, accounts: Optional[List[WalletAccount]] = None):
        self.accounts = [TEST_ACCOUNT] if accounts is None else accounts
        self.signed: List[tuple[str, bytes]] = []

    async def get_accounts(self) -> List[WalletAccount]:
        return list(self.accounts)

    async def sign_direct(self, address: str, sign_doc: bytes) -> bytes:
        self.signed.append((address, sign_doc))
        return b"\x01" * 64


class FakeCapability:
    """Stands in for the object an extension injects into its host."""

    def __init__(self, signer: Optional[FakeSigner] = None, enable_error: Optional[Exception] = None):
        self.signer = signer or FakeSigner()
        self.enable_error = enable_error
        self.enabled: List[str] = []
        self.suggested: List[dict[str, Any]] = []

    async def enable(self, chain_id: str) -> None:
        if self.enable_error is not None:
            raise self.enable_error
        self.enabled.append(chain_id)

    def get_offline_signer(self, chain_id: str) -> FakeSigner:
        return self.signer

    async def experimental_suggest_chain(self, chain_info: dict[str, Any]) -> None:
        self.suggested.append(chain_info)


class MinimalCapability:
    """Capability object without experimental_suggest_chain."""

    def __init__(self):
        self.signer = FakeSigner()

    async def enable(self, chain_id: str) -> None:
        return None

    def get_offline_signer(self, chain_id: str) -> FakeSigner:
        return self.signer


class FakeSigningClient:
    def __init__(self, result: Optional[BroadcastResult] = None, error: Optional[Exception] = None):
        self.result = result or BroadcastResult(code=0, transaction_hash="ABCDEF", height=10)
        self.error = error
        self.calls: List[tuple[str, Sequence[EncodeObject], Fee, str]] = []
        self.closed = False

    async def sign_and_broadcast(self, signer_address, messages, fee, memo=""):
        self.calls.append((signer_address, messages, fee, memo))
        if self.error is not None:
            raise self.error
        return self.result

    async def close(self):
        self.closed = True


def client_factory_for(client: FakeSigningClient):
    endpoints: List[str] = []

    async def factory(endpoint, signer):
        endpoints.append(endpoint)
        return client

    factory.endpoints = endpoints
    return factory


class FakeWalletAdapter(WalletAdapter):
    """
    Adapter answering from canned results. `outcomes` is consumed one entry
    per sign_and_broadcast_result call; an Exception entry is raised.
    """

    def __init__(
        self,
        outcomes: Optional[List[Any]] = None,
        account: WalletAccount = TEST_ACCOUNT,
        connect_error: Optional[Exception] = None,
        delay: float = 0,
    ):
        self.outcomes = list(outcomes or [])
        self.account = account
        self.connect_error = connect_error
        self.delay = delay
        self.connects: List[str] = []
        self.broadcasts: List[tuple[str, str, List[EncodeObject], Fee, str]] = []

    def is_available(self) -> bool:
        return True

    def get_name(self) -> str:
        return "Fake"

    async def connect(self, chain_id: str) -> WalletAccount:
        self.connects.append(chain_id)
        if self.connect_error is not None:
            raise self.connect_error
        return self.account

    async def get_signer(self, chain_id: str):
        return FakeSigner([self.account])

    async def sign_and_broadcast_result(self, endpoint, chain_id, messages, fee, memo=""):
        self.broadcasts.append((endpoint, chain_id, list(messages), fee, memo))
        if self.delay:
            await asyncio.sleep(self.delay)
        outcome = self.outcomes.pop(0) if self.outcomes else BroadcastResult(code=0, transaction_hash="ABCDEF")
        if isinstance(outcome, Exception):
            raise outcome
        return outcome

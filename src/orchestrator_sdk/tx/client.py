"""
Signing client used by the wallet adapters.

The adapters never sign themselves: they resolve an OfflineSigner from their
backend and hand it to a SigningClient bound to an endpoint. RestSigningClient
is the default implementation. It builds the transaction with cosmpy, asks the
offline signer for a SIGN_MODE_DIRECT signature, broadcasts over the Cosmos
REST (LCD) gateway with httpx, and waits for the transaction to be included.
"""

import asyncio
import base64
import hashlib
import importlib
import logging
from collections.abc import Mapping
from datetime import datetime, timedelta
from typing import Any, Optional, Protocol, Sequence, Type, runtime_checkable

import httpx
from google.protobuf import json_format
from google.protobuf.message import Message

from cosmpy.aerial.coins import Coin as CosmpyCoin
from cosmpy.aerial.tx import SigningCfg, Transaction, TxFee
from cosmpy.crypto.keypairs import PublicKey
from cosmpy.protos.cosmos.tx.v1beta1.tx_pb2 import SignDoc, TxRaw as CosmpyTxRaw

from orchestrator_sdk.errors import InvalidMessageStructure, TxTimeoutError
from orchestrator_sdk.tx.types import BroadcastResult, EncodeObject, Fee, WalletAccount

logger = logging.getLogger(__name__)


@runtime_checkable
class OfflineSigner(Protocol):
    """Signer handed out by a wallet backend. Never exposes key material."""

    async def get_accounts(self) -> list[WalletAccount]:
        ...

    async def sign_direct(self, address: str, sign_doc: bytes) -> bytes:
        """Sign a serialized SignDoc and return the 64-byte signature."""
        ...


class SigningClient(Protocol):
    async def sign_and_broadcast(
        self,
        signer_address: str,
        messages: Sequence[EncodeObject],
        fee: Fee | Mapping[str, Any],
        memo: str = "",
    ) -> BroadcastResult:
        ...

    async def close(self) -> None:
        ...


class RestError(Exception):
    """Non-2xx answer from the REST gateway."""
    def __init__(self, status_code: int, message: str):
        self.status_code = status_code
        self.message = message
        super().__init__(f"HTTP {status_code}: {message}")


_COSMPY_TX_MODULES: dict[str, str] = {
    "/cosmos.bank.v1beta1.MsgSend": "cosmpy.protos.cosmos.bank.v1beta1.tx_pb2",
    "/cosmos.bank.v1beta1.MsgMultiSend": "cosmpy.protos.cosmos.bank.v1beta1.tx_pb2",
    "/cosmos.gov.v1.MsgSubmitProposal": "cosmpy.protos.cosmos.gov.v1.tx_pb2",
    "/cosmos.gov.v1.MsgVote": "cosmpy.protos.cosmos.gov.v1.tx_pb2",
    "/cosmos.gov.v1.MsgVoteWeighted": "cosmpy.protos.cosmos.gov.v1.tx_pb2",
    "/cosmos.distribution.v1beta1.MsgCommunityPoolSpend": "cosmpy.protos.cosmos.distribution.v1beta1.tx_pb2",
    "/cosmos.upgrade.v1beta1.MsgSoftwareUpgrade": "cosmpy.protos.cosmos.upgrade.v1beta1.tx_pb2",
    "/cosmos.upgrade.v1beta1.MsgCancelUpgrade": "cosmpy.protos.cosmos.upgrade.v1beta1.tx_pb2",
}

_registered_types: dict[str, Type[Message]] = {}


def register_message_type(type_url: str, message_cls: Type[Message]):
    """Make a protobuf message class available for JSON-shaped messages of `type_url`."""
    _registered_types[type_url] = message_cls


def resolve_message_type(type_url: str) -> Type[Message]:
    if type_url in _registered_types:
        return _registered_types[type_url]

    module_path = _COSMPY_TX_MODULES.get(type_url)
    if module_path is None:
        raise InvalidMessageStructure(f"No protobuf type registered for {type_url}")

    try:
        module = importlib.import_module(module_path)
    except ImportError as e:
        raise InvalidMessageStructure(f"Protobuf module for {type_url} is not available: {e}") from e

    message_cls = getattr(module, type_url.rsplit(".", 1)[-1], None)
    if message_cls is None:
        raise InvalidMessageStructure(f"No protobuf type registered for {type_url}")

    _registered_types[type_url] = message_cls
    return message_cls


def _register_nested_types(value: Any):
    # json_format resolves "@type" entries through the default descriptor pool,
    # which only knows modules that have been imported
    if isinstance(value, Mapping):
        nested = value.get("@type")
        if isinstance(nested, str) and nested in (_COSMPY_TX_MODULES.keys() | _registered_types.keys()):
            resolve_message_type(nested)
        for v in value.values():
            _register_nested_types(v)
    elif isinstance(value, (list, tuple)):
        for v in value:
            _register_nested_types(v)


def to_protobuf(message: EncodeObject) -> Message:
    """Convert an EncodeObject into a protobuf message cosmpy can pack."""
    if isinstance(message.value, Message):
        return message.value

    message_cls = resolve_message_type(message.type_url)
    _register_nested_types(message.value)

    try:
        return json_format.ParseDict(message.value, message_cls())
    except json_format.ParseError as e:
        raise InvalidMessageStructure(f"Cannot encode {message.type_url}: {e}") from e


def _raise_for_status(resp: httpx.Response):
    if resp.is_success:
        return
    try:
        body = resp.json()
        message = body.get("message") or body.get("error") or resp.text
    except ValueError:
        message = resp.text
    raise RestError(resp.status_code, message)


class RestSigningClient:
    """
    SigningClient speaking the Cosmos REST gateway.

    Usage:
        client = await RestSigningClient.connect_with_signer("http://localhost:1317", signer)
        result = await client.sign_and_broadcast(address, messages, fee)
        await client.close()
    """

    def __init__(
        self,
        endpoint: str,
        signer: OfflineSigner,
        chain_id: Optional[str] = None,
        http_client: Optional[httpx.AsyncClient] = None,
        poll_interval_secs: float = 1.0,
        poll_timeout_secs: float = 60.0,
    ):
        self.endpoint = endpoint.rstrip("/")
        self.signer = signer
        self.chain_id = chain_id
        self.poll_interval_secs = poll_interval_secs
        self.poll_timeout_secs = poll_timeout_secs
        self._owns_http = http_client is None
        self._http = http_client or httpx.AsyncClient(timeout=30.0)

    @classmethod
    async def connect_with_signer(cls, endpoint: str, signer: OfflineSigner, **kwargs) -> 'RestSigningClient':
        client = cls(endpoint, signer, **kwargs)
        if client.chain_id is None:
            try:
                client.chain_id = await client.get_chain_id()
            except BaseException:
                await client.close()
                raise
        return client

    async def close(self) -> None:
        if self._owns_http:
            await self._http.aclose()

    async def get_chain_id(self) -> str:
        resp = await self._http.get(f"{self.endpoint}/cosmos/base/tendermint/v1beta1/node_info")
        _raise_for_status(resp)
        return resp.json()["default_node_info"]["network"]

    async def get_account_info(self, address: str) -> tuple[int, int]:
        """Return (account_number, sequence) for `address`."""
        resp = await self._http.get(f"{self.endpoint}/cosmos/auth/v1beta1/account_info/{address}")
        _raise_for_status(resp)
        info = resp.json().get("info")
        if info is None:
            raise RuntimeError('account_info query response is none')
        return int(info.get("account_number", 0)), int(info.get("sequence", 0))

    async def sign_and_broadcast(
        self,
        signer_address: str,
        messages: Sequence[EncodeObject],
        fee: Fee | Mapping[str, Any],
        memo: str = "",
    ) -> BroadcastResult:
        if isinstance(fee, Mapping):
            fee = Fee.from_dict(fee)
        accounts = await self.signer.get_accounts()
        account = next((a for a in accounts if a.address == signer_address), None)
        if account is None:
            raise RuntimeError(f"Signer has no account {signer_address}")

        account_number, sequence = await self.get_account_info(signer_address)
        logger.debug(f"Account info: seq={sequence}, num={account_number}")

        tx = Transaction()
        for msg in messages:
            tx.add_message(to_protobuf(msg))

        fee_kwargs: dict[str, Any] = {}
        if fee.payer:
            fee_kwargs["payer"] = fee.payer
        if fee.granter:
            fee_kwargs["granter"] = fee.granter

        tx.seal(
            signing_cfgs=[SigningCfg.direct(PublicKey(account.pubkey), sequence_num=sequence)],
            fee=TxFee(
                amount=[CosmpyCoin(amount=int(c.amount), denom=c.denom) for c in fee.amount],
                gas_limit=int(fee.gas),
                **fee_kwargs,
            ),
            memo=memo,
        )
        tx.complete()
        assert tx.tx is not None

        body_bytes = tx.tx.body.SerializeToString()
        auth_info_bytes = tx.tx.auth_info.SerializeToString()

        sign_doc = SignDoc(
            body_bytes=body_bytes,
            auth_info_bytes=auth_info_bytes,
            chain_id=self.chain_id or "",
            account_number=account_number,
        )
        signature = await self.signer.sign_direct(signer_address, sign_doc.SerializeToString())

        tx_bytes = CosmpyTxRaw(
            body_bytes=body_bytes,
            auth_info_bytes=auth_info_bytes,
            signatures=[signature],
        ).SerializeToString()

        logger.debug("Broadcasting transaction...")
        resp = await self._http.post(
            f"{self.endpoint}/cosmos/tx/v1beta1/txs",
            json={
                "tx_bytes": base64.b64encode(tx_bytes).decode(),
                "mode": "BROADCAST_MODE_SYNC",
            },
        )
        _raise_for_status(resp)

        check = BroadcastResult.from_tx_response(resp.json().get("tx_response") or {})
        if check.code != 0:
            return check

        tx_hash = check.transaction_hash or hashlib.sha256(tx_bytes).hexdigest().upper()
        logger.debug(f"Waiting for transaction {tx_hash} to be included in a block...")
        return await self.wait_for_tx(tx_hash)

    async def wait_for_tx(self, tx_hash: str) -> BroadcastResult:
        timeout = timedelta(seconds=self.poll_timeout_secs)
        start = datetime.now()
        while True:
            resp = await self._http.get(f"{self.endpoint}/cosmos/tx/v1beta1/txs/{tx_hash}")
            if resp.is_success:
                tx_response = resp.json().get("tx_response")
                if tx_response is not None:
                    return BroadcastResult.from_tx_response(tx_response)
            elif resp.status_code not in (400, 404) or "not found" not in resp.text:
                _raise_for_status(resp)

            if datetime.now() - start >= timeout:
                raise TxTimeoutError(
                    f"Transaction with hash {tx_hash} was submitted but was not yet found on the chain. "
                    f"You might want to check later."
                )

            await asyncio.sleep(self.poll_interval_secs)
